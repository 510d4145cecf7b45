from __future__ import annotations

from pathlib import Path
import re

from nginx_sm import paths, system

_CONF_PATH_RE = re.compile(r"--conf-path=(\S+)")


class Nginx:
    """
    Thin wrapper over the nginx binary's own CLI:
    - `nginx -V` to find the compiled-in configuration file
    - `nginx -t` to test the configuration
    - `nginx -s reload` to apply it
    """

    def __init__(self, binary: str = paths.NGINX_BIN, verbose: bool = False) -> None:
        self.binary = binary
        self.verbose = verbose
        self.last_error = ""

    def installed(self) -> bool:
        return system.has_cmd(self.binary)

    def conf_path(self) -> Path:
        # nginx -V writes its build configuration to stderr.
        result = system.run([self.binary, "-V"], check=False)
        output = (result.stdout or "") + (result.stderr or "")
        return parse_conf_path(output)

    def test_config(self) -> bool:
        result = system.run([self.binary, "-t"], check=False, capture=not self.verbose)
        self.last_error = system.tail_stderr(result.stderr)
        return result.returncode == 0

    def reload(self) -> None:
        system.run([self.binary, "-s", "reload"], capture=not self.verbose)


def parse_conf_path(version_output: str) -> Path:
    match = _CONF_PATH_RE.search(version_output)
    if not match:
        return paths.NGINX_DEFAULT_CONF_PATH
    return Path(match.group(1))
