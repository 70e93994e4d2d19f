from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

import requests

from ..core.exceptions import BackendError, BackendTimeoutError
from .connection import BackendConnection

logger = logging.getLogger(__name__)

QueryParams = Union[Mapping[str, Any], Sequence[Tuple[str, Any]]]


@contextmanager
def backend_session(conn_factory: BackendConnection) -> Iterator[requests.Session]:
    session = conn_factory.connect()
    try:
        yield session
    finally:
        session.close()


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason or f"HTTP {resp.status_code}"
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)


def _send(conn_factory: BackendConnection, method: str, path: str, **kwargs: Any) -> Any:
    url = conn_factory.url_for(path)
    with backend_session(conn_factory) as session:
        try:
            resp = session.request(method, url, timeout=conn_factory.timeout, **kwargs)
        except requests.Timeout as e:
            logger.warning("backend timeout: %s %s", method, path)
            raise BackendTimeoutError(f"Backend request timed out: {path}") from e
        except requests.RequestException as e:
            logger.warning("backend unreachable: %s %s (%s)", method, path, e)
            raise BackendError(f"Backend request failed: {e}") from e

        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.warning("backend error %s on %s %s: %s", resp.status_code, method, path, message)
            raise BackendError(message, status_code=resp.status_code)

        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise BackendError(f"Backend returned invalid JSON for {path}") from e


def call_rpc(conn_factory: BackendConnection, function: str, params: Optional[Mapping[str, Any]] = None) -> Any:
    """Invoke a remote procedure; returns the decoded JSON payload."""
    payload = _send(conn_factory, "POST", f"rpc/{function}", json=dict(params or {}))
    logger.debug("rpc %s -> %s", function, type(payload).__name__)
    return payload


def select_rows(conn_factory: BackendConnection, table: str, *, params: QueryParams) -> List[Dict[str, Any]]:
    """Read rows from a table/view using REST filter syntax (col=op.value)."""
    rows = fetchall(_send(conn_factory, "GET", table, params=params))
    logger.debug("select %s -> %d rows", table, len(rows))
    return rows


def insert_rows(conn_factory: BackendConnection, table: str, rows: Sequence[Mapping[str, Any]]) -> None:
    _send(conn_factory, "POST", table, json=[dict(r) for r in rows], headers={"Prefer": "return=minimal"})
    logger.debug("insert %s <- %d rows", table, len(rows))


def update_rows(conn_factory: BackendConnection, table: str, *, params: QueryParams, values: Mapping[str, Any]) -> None:
    _send(conn_factory, "PATCH", table, params=params, json=dict(values), headers={"Prefer": "return=minimal"})
    logger.debug("update %s", table)


def delete_rows(conn_factory: BackendConnection, table: str, *, params: QueryParams) -> None:
    _send(conn_factory, "DELETE", table, params=params, headers={"Prefer": "return=minimal"})
    logger.debug("delete %s", table)


def fetchall(payload: Any) -> List[Dict[str, Any]]:
    if payload is None:
        return []
    if isinstance(payload, dict):
        return [payload]
    return [r for r in payload if isinstance(r, dict)]


def to_int_or_none(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def to_float_or_none(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def to_text_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
