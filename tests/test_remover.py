import pytest

from imagetools.bgremove import remover as remover_module
from imagetools.bgremove.remover import RembgRemover, get_session


@pytest.fixture
def fake_rembg(monkeypatch):
    created = []

    def new_session(model_name):
        created.append(model_name)
        return f"session:{model_name}"

    def remove(data, session=None):
        return b"png:" + session.encode() + b":" + data

    monkeypatch.setattr(remover_module, "_SESSION_CACHE", {})
    monkeypatch.setattr(remover_module, "new_session", new_session)
    monkeypatch.setattr(remover_module, "remove", remove)
    return created


def test_sessions_are_cached_per_model(fake_rembg):
    assert get_session("u2net") == "session:u2net"
    assert get_session("u2net") == "session:u2net"
    assert get_session("isnet-general-use") == "session:isnet-general-use"
    assert fake_rembg == ["u2net", "isnet-general-use"]


def test_remove_uses_model_session(fake_rembg):
    out = RembgRemover("u2net").remove(b"img")
    assert out == b"png:session:u2net:img"


def test_remove_rejects_empty_input(fake_rembg):
    with pytest.raises(ValueError):
        RembgRemover().remove(b"")
    assert fake_rembg == []
