from pathlib import Path
import subprocess

from nginx_sm import nginx, system

VERSION_OUTPUT = (
    "nginx version: nginx/1.24.0 (Ubuntu)\n"
    "built with OpenSSL 3.0.13 30 Jan 2024\n"
    "configure arguments: --with-cc-opt='-g -O2' --prefix=/usr/share/nginx "
    "--conf-path=/etc/nginx/nginx.conf --http-log-path=/var/log/nginx/access.log\n"
)


def test_parse_conf_path():
    assert nginx.parse_conf_path(VERSION_OUTPUT) == Path("/etc/nginx/nginx.conf")


def test_parse_conf_path_defaults_without_flag():
    assert nginx.parse_conf_path("nginx version: nginx/1.25.3\n") == Path("/etc/nginx/nginx.conf")


def test_conf_path_reads_stderr(monkeypatch):
    calls = []

    def fake_run(argv, check=True, capture=True):
        calls.append(list(argv))
        return subprocess.CompletedProcess(argv, 0, "", VERSION_OUTPUT.replace("/etc/nginx", "/opt/nginx/conf"))

    monkeypatch.setattr(system, "run", fake_run)
    assert nginx.Nginx("/usr/sbin/nginx").conf_path() == Path("/opt/nginx/conf/nginx.conf")
    assert calls == [["/usr/sbin/nginx", "-V"]]


def test_test_config_and_reload(monkeypatch):
    calls = []
    results = iter([
        subprocess.CompletedProcess(["nginx", "-t"], 1, "", "nginx: [emerg] unknown directive\n"),
        subprocess.CompletedProcess(["nginx", "-t"], 0, "", "nginx: configuration file test is successful\n"),
        subprocess.CompletedProcess(["nginx", "-s", "reload"], 0, "", ""),
    ])

    def fake_run(argv, check=True, capture=True):
        calls.append((list(argv), check, capture))
        return next(results)

    monkeypatch.setattr(system, "run", fake_run)
    server = nginx.Nginx()

    assert server.test_config() is False
    assert "unknown directive" in server.last_error
    assert server.test_config() is True
    server.reload()

    assert calls == [
        (["nginx", "-t"], False, True),
        (["nginx", "-t"], False, True),
        (["nginx", "-s", "reload"], True, True),
    ]


def test_verbose_streams_output(monkeypatch):
    captures = []

    def fake_run(argv, check=True, capture=True):
        captures.append(capture)
        return subprocess.CompletedProcess(argv, 0, None, None)

    monkeypatch.setattr(system, "run", fake_run)
    server = nginx.Nginx(verbose=True)
    assert server.test_config() is True
    server.reload()
    assert captures == [False, False]
