import json
import logging
import os
from datetime import date

DEFAULT_CONFIG = {
    'holiday_year_start': '01/12',   # dd/mm
    'holiday_year_end': '30/11',     # dd/mm
    'default_working_days': [1, 2, 3, 4, 5],
    'portal_id': 'employee',
    'default_leave_type': 'annual',
}


def _config_path():
    base = os.path.join(os.path.expanduser('~'), '.leavecompass')
    os.makedirs(base, exist_ok=True)
    return os.path.join(base, 'leavecompass_config.json')


def load_config(path=None) -> dict:
    path = path or _config_path()
    cfg = dict(DEFAULT_CONFIG)
    if not os.path.exists(path):
        return cfg
    try:
        with open(path, 'r', encoding='utf-8') as f:
            stored = json.load(f)
    except (OSError, ValueError) as e:
        logging.warning(f"Konfiguration {path} nicht lesbar, nutze Defaults: {e}")
        return cfg
    if isinstance(stored, dict):
        cfg.update(stored)
    return cfg


def save_config(cfg: dict, path=None):
    path = path or _config_path()
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(cfg, f, ensure_ascii=False, indent=2)
    except OSError as e:
        logging.error(f"Konfiguration konnte nicht gespeichert werden: {e}")
        raise


def _day_month(value, fallback):
    try:
        dd, mm = (int(x) for x in str(value).split('/'))
        # Nicht-Schaltjahr: 29/02 wäre nicht in jedem Jahr gültig
        date(2001, mm, dd)
    except (ValueError, OverflowError):
        logging.warning(f"Ungültige Jahresgrenze {value!r}, nutze {fallback}")
        return _day_month(fallback, fallback)
    return dd, mm


def holiday_year_boundary(config=None):
    """((Tag, Monat) Beginn, (Tag, Monat) Ende) des Urlaubsjahres."""
    cfg = config or DEFAULT_CONFIG
    start = cfg.get('holiday_year_start', DEFAULT_CONFIG['holiday_year_start'])
    end = cfg.get('holiday_year_end', DEFAULT_CONFIG['holiday_year_end'])
    return (_day_month(start, DEFAULT_CONFIG['holiday_year_start']),
            _day_month(end, DEFAULT_CONFIG['holiday_year_end']))
