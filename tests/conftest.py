import pytest

from arc import default_settings
from app.listing import ListingView


@pytest.fixture
def settings():
    # PATH上の7zを探さずに済むよう明示する
    return default_settings(shell="/bin/sh", sevenzip="7z")


@pytest.fixture
def sample_tree(tmp_path):
    """tmp_path/sample 以下に小さなファイル群を作る"""
    source = tmp_path / "sample"
    source.mkdir()
    for i in range(3):
        (source / f"file{i}.txt").write_text(f"sample {i}\n")
    return source


class FakeListingView(ListingView):
    """更新要求を記録するだけのリストビュー"""

    def __init__(self, directory="", cursor=None):
        self.directory = directory
        self.cursor = cursor
        self.refresh_calls = 0
        self.refreshed_entries = []

    def path_at_cursor(self):
        return self.cursor

    def refresh(self):
        self.refresh_calls += 1

    def refresh_entry(self, path):
        self.refreshed_entries.append(path)


@pytest.fixture
def fake_view_class():
    return FakeListingView

