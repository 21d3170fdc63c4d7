"""
アクションハンドラ
"""

from .pack_actions import PackActionHandler

__all__ = ['PackActionHandler']
