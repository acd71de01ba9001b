import configparser
import locale
import logging
import os
import re

from .core.instance_spec import InstanceSpec
from .utils import app_dir

INI_FILE_NAME = "EdgeSize.ini"
SYSTEM_SECTION = "System"

SYSTEM_DEFAULTS = {
    "count": 2,
    "sleep": 200,           # ms after input-idle before the window is searched
    "idletimeout": -1,      # ms, -1 = wait forever
}

APP_DEFAULTS = {
    "path": r"C:\Program Files (x86)\Microsoft\Edge\Application\msedge.exe",
    "arg": "--app=http://www.yahoo.co.jp/",
    "procname": "msedge",
    "classname": "Chrome_WidgetWin_1",
    "namepropertylocal": "アドレスと検索バー",
    "nameproperty": "address and search bar",
    "address": "[\"http://\"|\"https://\"]www\\.yahoo\\.co\\.jp.*",
    "x": 0,
    "y": 0,
    "width": 960,
    "height": 1024,
}

log = logging.getLogger(__name__)


class ConfigError(Exception):
    pass


def default_ini_path():
    return os.path.join(app_dir(), INI_FILE_NAME)


def _read_text(path):
    with open(path, 'rb') as f:
        raw = f.read()
    if raw.startswith((b'\xff\xfe', b'\xfe\xff')):
        return raw.decode('utf-16')
    try:
        return raw.decode('utf-8-sig')
    except UnicodeDecodeError:
        # Notepad-saved INI files on a Japanese system are cp932
        return raw.decode(locale.getpreferredencoding(False), errors='replace')


def _unquote(value):
    # GetPrivateProfileString drops one pair of enclosing quotes
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


class Settings:
    """
    EdgeSize.ini reader. Missing file, section or key falls back to the
    defaults above, the way GetPrivateProfileString/Int do.
    """
    def __init__(self, path=None):
        self.path = path or default_ini_path()
        self.parser = self._load()
        self.count = self._get_int(SYSTEM_SECTION, "count", SYSTEM_DEFAULTS["count"])
        self.sleep_ms = self._get_int(SYSTEM_SECTION, "sleep", SYSTEM_DEFAULTS["sleep"])
        self.idle_timeout_ms = self._get_int(SYSTEM_SECTION, "idletimeout",
                                             SYSTEM_DEFAULTS["idletimeout"])
        if self.count < 0:
            raise ConfigError(f"[{SYSTEM_SECTION}] Count must not be negative: {self.count}")

    def _load(self):
        parser = configparser.ConfigParser(interpolation=None, strict=False)
        if not os.path.exists(self.path):
            log.info("%s not found, using defaults", self.path)
            return parser
        try:
            parser.read_string(_read_text(self.path), source=self.path)
        except configparser.Error as e:
            raise ConfigError(str(e)) from e
        return parser

    def _section(self, name):
        # section names are case-insensitive in INI files
        for s in self.parser.sections():
            if s.lower() == name.lower():
                return s
        return None

    def _get(self, section, key, default):
        s = self._section(section)
        if s is None or not self.parser.has_option(s, key):
            return default
        return _unquote(self.parser.get(s, key))

    def _get_int(self, section, key, default):
        value = self._get(section, key, default)
        try:
            return int(str(value).strip())
        except ValueError:
            raise ConfigError(f"[{section}] {key} is not an integer: {value!r}") from None

    def section_names(self):
        return [f"App{i}" for i in range(1, self.count + 1)]

    def instance_spec(self, section):
        regex = self._get(section, "address", APP_DEFAULTS["address"])
        try:
            re.compile(regex)
        except re.error as e:
            raise ConfigError(f"[{section}] Address is not a valid regular expression: {e}") from e

        return InstanceSpec(
            section=section,
            path=self._get(section, "path", APP_DEFAULTS["path"]),
            args=self._get(section, "arg", APP_DEFAULTS["arg"]),
            process_name=self._get(section, "procname", APP_DEFAULTS["procname"]),
            class_name=self._get(section, "classname", APP_DEFAULTS["classname"]),
            name_property_local=self._get(section, "namepropertylocal", APP_DEFAULTS["namepropertylocal"]),
            name_property=self._get(section, "nameproperty", APP_DEFAULTS["nameproperty"]),
            address_regex=regex,
            x=self._get_int(section, "x", APP_DEFAULTS["x"]),
            y=self._get_int(section, "y", APP_DEFAULTS["y"]),
            width=self._get_int(section, "width", APP_DEFAULTS["width"]),
            height=self._get_int(section, "height", APP_DEFAULTS["height"]),
            sleep_ms=self._get_int(section, "sleep", self.sleep_ms),
        )

    def instance_specs(self):
        return [self.instance_spec(s) for s in self.section_names()]
