from app.completion import CompletionHandler
from app.listing import ListingRegistry
from proc import LogSurface


def make_surface(result_path):
    surface = LogSurface(1)
    surface.set_pending_result(result_path)
    return surface


def test_existing_directory_refreshes_all_views_showing_it(tmp_path, fake_view_class):
    target = tmp_path / "x"
    target.mkdir()
    registry = ListingRegistry()
    first = fake_view_class(str(target))
    second = fake_view_class(str(target) + "/")
    other = fake_view_class(str(tmp_path))
    for view in (first, second, other):
        registry.register(view)

    refreshed = CompletionHandler(registry)(make_surface(str(target)), "finished")

    assert refreshed == [first, second]
    assert first.refresh_calls == 1
    assert second.refresh_calls == 1
    assert other.refresh_calls == 0


def test_existing_file_refreshes_only_its_entry(tmp_path, fake_view_class):
    archive = tmp_path / "x.tgz"
    archive.write_bytes(b"data")
    registry = ListingRegistry()
    parent_view = fake_view_class(str(tmp_path))
    elsewhere = fake_view_class(str(tmp_path / "elsewhere"))
    registry.register(parent_view)
    registry.register(elsewhere)

    CompletionHandler(registry)(make_surface(str(archive)), "finished")

    assert parent_view.refreshed_entries == [str(archive)]
    assert parent_view.refresh_calls == 0
    assert elsewhere.refreshed_entries == []


def test_missing_result_does_not_refresh(tmp_path, fake_view_class):
    registry = ListingRegistry()
    view = fake_view_class(str(tmp_path))
    registry.register(view)

    result = CompletionHandler(registry)(make_surface(str(tmp_path / "missing")),
                                         "exited abnormally with code 2")

    assert result == []
    assert view.refresh_calls == 0
    assert view.refreshed_entries == []


def test_empty_result_does_not_refresh(tmp_path, fake_view_class):
    registry = ListingRegistry()
    view = fake_view_class(str(tmp_path))
    registry.register(view)

    assert CompletionHandler(registry)(make_surface(None), "finished") == []
    assert view.refresh_calls == 0


def test_pending_result_is_consumed(tmp_path, fake_view_class):
    registry = ListingRegistry()
    view = fake_view_class(str(tmp_path))
    registry.register(view)
    handler = CompletionHandler(registry)
    surface = make_surface(str(tmp_path))

    handler(surface, "finished")
    handler(surface, "finished")

    assert view.refresh_calls == 1


def test_exit_status_is_not_consulted(tmp_path, fake_view_class):
    registry = ListingRegistry()
    view = fake_view_class(str(tmp_path))
    registry.register(view)

    CompletionHandler(registry)(make_surface(str(tmp_path)), "exited abnormally with code 1")

    assert view.refresh_calls == 1
