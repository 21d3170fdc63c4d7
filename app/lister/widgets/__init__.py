"""
リストビューア用ウィジェット
"""
