import locale
import os
import json
import warnings
from pathlib import Path

PACKAGE_DIR = Path(__file__).parent
LOCALES_DIR = PACKAGE_DIR / "locales"


def system_language():
    try:
        lang_code = locale.getlocale()[0]
        if lang_code is None:
            lang = os.environ.get('LANG', '')
            if lang:
                lang_code = lang
            else:
                with warnings.catch_warnings():
                    warnings.simplefilter("ignore", DeprecationWarning)
                    lang_code = locale.getdefaultlocale()[0]
    except ValueError:
        lang_code = None
    # "ja_JP" on POSIX, "Japanese_Japan" on Windows
    if not lang_code:
        return "en"
    if lang_code.lower().startswith("japanese"):
        return "ja"
    return lang_code[:2].lower()


def load_translations(lang=None):
    lang = lang or system_language()
    lang_file = LOCALES_DIR / f"{lang}.json"
    if not lang_file.exists():
        lang_file = LOCALES_DIR / "en.json"
    if not lang_file.exists():
        return {}
    with open(lang_file, 'r', encoding='utf-8') as f:
        return json.load(f)


translations = load_translations()


def tr(key, *args):
    text = translations.get(key, key)
    if args:
        return text.format(*args)
    return text
