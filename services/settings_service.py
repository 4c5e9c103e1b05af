import json
import logging
import sqlite3
from typing import Any

from database.db_manager import DatabaseManager
from models.app_setting import AppSetting
from models.result import ActionResult
from services.errors import failure_message
from utils.constants import CURRENCY_SETTING_KEY, DEFAULT_CURRENCY
from utils.currency import CURRENCIES

logger = logging.getLogger(__name__)


class SettingsService:
    """Key/value settings; values are free-form strings, usually JSON."""

    def __init__(self, db: DatabaseManager):
        self._db = db

    def get(self, key: str) -> str | None:
        try:
            return self._db.get_setting(key)
        except sqlite3.Error:
            logger.exception("Failed to get setting for key %s", key)
            return None

    def set(self, key: str, value: str) -> ActionResult:
        if not key:
            return ActionResult.fail("Setting key is required.")
        try:
            self._db.set_setting(key, value)
        except sqlite3.Error:
            logger.exception("Failed to set setting for key %s", key)
            return ActionResult.fail(failure_message(f"set setting {key}"))
        return ActionResult.ok()

    def get_json(self, key: str, default: Any = None) -> Any:
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Setting %s does not hold JSON: %r", key, raw)
            return default

    def set_json(self, key: str, value: Any) -> ActionResult:
        return self.set(key, json.dumps(value))

    def get_currency(self) -> str:
        code = self.get_json(CURRENCY_SETTING_KEY, DEFAULT_CURRENCY)
        return code if isinstance(code, str) and code in CURRENCIES else DEFAULT_CURRENCY

    def set_currency(self, code: str) -> ActionResult:
        code = (code or "").strip().upper()
        if code not in CURRENCIES:
            return ActionResult.fail(
                f"Unsupported currency '{code}'. Choose one of: {', '.join(CURRENCIES)}."
            )
        return self.set_json(CURRENCY_SETTING_KEY, code)

    # ── Export / import ──────────────────────────────────────────────────────

    def export_all(self) -> list[AppSetting]:
        try:
            return [AppSetting(key=r["key"], value=r["value"]) for r in self._db.get_all_settings()]
        except sqlite3.Error:
            logger.exception("Failed to fetch all settings for export")
            return []

    def import_all(self, records: list[dict], commit: bool = True) -> ActionResult:
        """Upsert each {key, value}; keys absent from records are kept."""
        count = 0
        try:
            for record in records:
                key = record.get("key") if isinstance(record, dict) else None
                value = record.get("value") if isinstance(record, dict) else None
                if not key or not isinstance(key, str) or value is None:
                    logger.warning("Skipping setting import record %r", record)
                    continue
                if not isinstance(value, str):
                    value = json.dumps(value)
                self._db.set_setting(key, value, commit=False)
                count += 1
            if commit:
                self._db.commit()
        except sqlite3.Error:
            logger.exception("Failed to import settings")
            self._db.rollback()
            return ActionResult.fail(failure_message("import settings"))
        logger.info("Imported %d settings", count)
        return ActionResult.ok(count=count)
