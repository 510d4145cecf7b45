import pytest

from nginx_sm import config, paths


class FakeNginx:
    def __init__(self, passes=True):
        self.binary = "nginx"
        self.passes = passes
        self.calls = []
        self.last_error = ""

    def installed(self):
        return True

    def test_config(self):
        self.calls.append("test")
        if not self.passes:
            self.last_error = "nginx: [emerg] unexpected end of file"
        return self.passes

    def reload(self):
        self.calls.append("reload")


class FakeInput:
    def __init__(self, keys="", lines=()):
        self.keys = list(keys)
        self.lines = list(lines)
        self.prompts = []

    def keypress(self, message):
        self.prompts.append(message)
        return self.keys.pop(0) if self.keys else ""

    def line(self, message):
        self.prompts.append(message)
        return self.lines.pop(0) if self.lines else ""


@pytest.fixture
def temp_paths(tmp_path, monkeypatch):
    etc_dir = tmp_path / "etc" / "nginx-sm"
    nginx_av = tmp_path / "nginx" / "sites-available"
    nginx_en = tmp_path / "nginx" / "sites-enabled"

    monkeypatch.setattr(paths, "ETC_DIR", etc_dir)
    monkeypatch.setattr(paths, "CONFIG_PATH", etc_dir / "config.toml")

    etc_dir.mkdir(parents=True, exist_ok=True)
    nginx_av.mkdir(parents=True, exist_ok=True)
    nginx_en.mkdir(parents=True, exist_ok=True)

    return {
        "etc_dir": etc_dir,
        "config_path": etc_dir / "config.toml",
        "nginx_av": nginx_av,
        "nginx_en": nginx_en,
    }


@pytest.fixture
def fake_nginx():
    return FakeNginx()


@pytest.fixture
def make_ctx(temp_paths):
    def _make(nginx=None, keys="", lines=(), root=True, editor="nano"):
        return config.SiteContext(
            sites_available=temp_paths["nginx_av"],
            sites_enabled=temp_paths["nginx_en"],
            nginx=nginx or FakeNginx(),
            editor=editor,
            input=FakeInput(keys=keys, lines=lines),
            is_root=lambda: root,
        )

    return _make
