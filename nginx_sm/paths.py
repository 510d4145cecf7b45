from pathlib import Path

ETC_DIR = Path("/etc/nginx-sm")
CONFIG_PATH = ETC_DIR / "config.toml"

NGINX_BIN = "nginx"
NGINX_DEFAULT_CONF_PATH = Path("/etc/nginx/nginx.conf")
SITES_AVAILABLE_NAME = "sites-available"
SITES_ENABLED_NAME = "sites-enabled"

DEFAULT_EDITOR = "nano"
