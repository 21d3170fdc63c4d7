"""
arcpack エントリーポイント

このモジュールは `python -m app.lister` コマンドで実行されたときに
main.py のメイン機能を呼び出します。
"""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
