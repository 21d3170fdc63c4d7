"""
リストビューア用データモデル
"""
