"""
ディレクトリリストビューアパッケージ

PySide6のリストウィンドウとバッチモードを提供
"""
