from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path

import streamlit as st
from dotenv import load_dotenv

load_dotenv()

CONFIG_FILE_NAME = "settings.json"

ENV_API_URL = "FLEX_ERP_API_URL"
ENV_DATA_DIR = "FLEX_ERP_DATA_DIR"
ENV_REQUEST_TIMEOUT = "FLEX_ERP_REQUEST_TIMEOUT"
ENV_QUERY_TTL = "FLEX_ERP_QUERY_TTL"

DEFAULT_API_URL = "http://localhost:8080"
DEFAULT_QUERY_TTL = 300  # 5 minutes


@dataclass(frozen=True)
class Settings:
    api_base_url: str
    data_dir: Path
    request_timeout: float = 30.0
    query_ttl_seconds: int = DEFAULT_QUERY_TTL
    page_size: int = 50
    currency: str = "USD"


def _default_data_dir() -> Path:
    return Path.home() / ".flex_erp_admin"


def _load_persisted_settings(data_dir: Path) -> dict:
    cfg = data_dir / CONFIG_FILE_NAME
    if cfg.exists():
        try:
            return json.loads(cfg.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return {}
    return {}


def _env_number(name: str, default: float) -> float:
    raw = os.getenv(name, "")
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


# Cache decorators are applied at import time, so the staleness window is read once.
QUERY_TTL_SECONDS = int(_env_number(ENV_QUERY_TTL, DEFAULT_QUERY_TTL))


def persist_connection(api_base_url: str, data_dir_str: str) -> None:
    api_base_url = str(api_base_url).strip().rstrip("/")
    if not api_base_url.startswith(("http://", "https://")):
        raise ValueError("API URL must start with http:// or https://")

    data_dir = Path(data_dir_str).expanduser().resolve()
    data_dir.mkdir(parents=True, exist_ok=True)

    payload = {"api_base_url": api_base_url, "data_dir": str(data_dir)}
    (data_dir / CONFIG_FILE_NAME).write_text(json.dumps(payload, indent=2), encoding="utf-8")

    # The default folder always points at the active one so a fresh process finds it
    default_dir = _default_data_dir()
    if default_dir.resolve() != data_dir:
        default_dir.mkdir(parents=True, exist_ok=True)
        (default_dir / CONFIG_FILE_NAME).write_text(json.dumps(payload, indent=2), encoding="utf-8")

    st.session_state["flex_erp_api_url"] = api_base_url
    st.session_state["flex_erp_data_dir"] = str(data_dir)


@st.cache_resource
def _shared_settings() -> Settings:
    # Process-wide: environment variables (.env honoured), then the persisted
    # settings in the default folder, then defaults.
    persisted = _load_persisted_settings(_default_data_dir())

    if os.getenv(ENV_DATA_DIR):
        data_dir = Path(os.getenv(ENV_DATA_DIR, ""))
    else:
        data_dir = Path(persisted.get("data_dir", _default_data_dir()))
    data_dir = data_dir.expanduser().resolve()

    api_url = os.getenv(ENV_API_URL) or str(persisted.get("api_base_url", DEFAULT_API_URL))

    data_dir.mkdir(parents=True, exist_ok=True)
    return Settings(
        api_base_url=api_url.rstrip("/"),
        data_dir=data_dir,
        request_timeout=_env_number(ENV_REQUEST_TIMEOUT, 30.0),
        query_ttl_seconds=QUERY_TTL_SECONDS,
    )


def get_settings() -> Settings:
    """Shared settings with this browser session's Connection choice layered on top."""
    settings = _shared_settings()
    overrides = {}
    if "flex_erp_api_url" in st.session_state:
        overrides["api_base_url"] = str(st.session_state["flex_erp_api_url"]).rstrip("/")
    if "flex_erp_data_dir" in st.session_state:
        overrides["data_dir"] = Path(st.session_state["flex_erp_data_dir"]).expanduser().resolve()
    return replace(settings, **overrides) if overrides else settings
