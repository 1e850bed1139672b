import pytest

from scantoreturn.core.dashboard import build_scan_url, is_backend_url, summarize_tags, tag_id_batch
from scantoreturn.core.tag_cache import seed_records


def test_summarize_seeded_tags():
    assert summarize_tags(seed_records(10).values()) == {"total": 10, "active": 1, "new": 9}


def test_summarize_empty():
    assert summarize_tags([]) == {"total": 0, "active": 0, "new": 0}


def test_tag_id_batch():
    assert tag_id_batch(9, 3) == ["ID_0009", "ID_0010", "ID_0011"]


@pytest.mark.parametrize("start, count", [(0, 5), (1, 0), (1, 501)])
def test_tag_id_batch_rejects_bad_ranges(start, count):
    with pytest.raises(ValueError):
        tag_id_batch(start, count)


def test_build_scan_url():
    assert build_scan_url("ID_0001", "https://tags.example/app/") == "https://tags.example/app/?tag=ID_0001"
    assert build_scan_url("ID_0002", "https://tags.example/?v=2&tag=old") == "https://tags.example/?v=2&tag=ID_0002"


def test_is_backend_url():
    assert is_backend_url("https://script.google.com/macros/s/abc/exec")
    assert not is_backend_url("https://tags.example/app/")
    assert not is_backend_url("")
