# csvedit/client.py
"""
HTTP client for the CSV editor API, used by the Streamlit UI.

``session`` can be anything with the requests call signature
(``requests.Session`` in production, FastAPI's ``TestClient`` in tests).
"""
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import pandas as pd
import requests

from csvedit.models import Row, cell_to_str


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, details: Optional[str] = None):
        super().__init__(f"{status_code}: {message}" + (f" ({details})" if details else ""))
        self.status_code = status_code
        self.message = message
        self.details = details


class CsvApiClient:
    def __init__(self, base_url: str, session: Any = None, timeout: Optional[float] = 30):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _request(self, method: str, path: str, **kwargs):
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        resp = getattr(self.session, method)(self._url(path), **kwargs)
        if resp.status_code >= 400:
            try:
                body = resp.json()
            except ValueError:
                body = {"error": resp.text}
            if not isinstance(body, dict):
                body = {"error": str(body)}
            raise ApiError(resp.status_code, body.get("error", "Request failed"), body.get("details"))
        return resp

    # files
    def list_files(self) -> List[str]:
        return self._request("get", "/files").json()

    def upload(self, filename: str, data: bytes, separator: Optional[str] = None) -> Dict[str, str]:
        form = {"separator": separator} if separator else {}
        files = {"csvFile": (filename, data, "text/csv")}
        return self._request("post", "/upload", files=files, data=form).json()

    def get_rows(self, filename: str, separator: Optional[str] = None) -> List[Row]:
        return self._request("get", f"/file/{_name(filename)}", params=_sep_params(separator)).json()

    def get_table(self, filename: str, separator: Optional[str] = None) -> Dict[str, Any]:
        return self._request("get", f"/file/{_name(filename)}/table", params=_sep_params(separator)).json()

    def archive(self, filename: str) -> str:
        return self._request("post", f"/file/{_name(filename)}/archive").json()["message"]

    def download(self, filename: str) -> bytes:
        return self._request("get", f"/download/{_name(filename)}").content

    # rows
    def add_row(self, filename: str, row: Row, separator: Optional[str] = None) -> str:
        body = {"newRow": row, "separator": separator}
        return self._request("post", f"/file/{_name(filename)}/row", json=body).json()["message"]

    def update_row(self, filename: str, index: int, row: Row, separator: Optional[str] = None) -> str:
        body = {"updatedRow": row, "separator": separator}
        return self._request("put", f"/file/{_name(filename)}/row/{index}", json=body).json()["message"]

    def delete_row(self, filename: str, index: int, separator: Optional[str] = None) -> str:
        return self._request("delete", f"/file/{_name(filename)}/row/{index}", params=_sep_params(separator)).json()["message"]

    # structure
    def replace_structure(
        self,
        filename: str,
        rows: Sequence[Row],
        headers: Optional[Sequence[str]] = None,
        separator: Optional[str] = None,
    ) -> str:
        body = {"newData": list(rows), "headers": list(headers) if headers is not None else None, "separator": separator}
        return self._request("put", f"/file/{_name(filename)}/structure", json=body).json()["message"]

    def move_column(self, filename: str, index: int, direction: str, separator: Optional[str] = None) -> str:
        body = {"direction": direction, "separator": separator}
        return self._request("post", f"/file/{_name(filename)}/column/{index}/move", json=body).json()["message"]

    def delete_column(self, filename: str, index: int, separator: Optional[str] = None) -> str:
        return self._request("delete", f"/file/{_name(filename)}/column/{index}", params=_sep_params(separator)).json()["message"]


def _name(filename: str) -> str:
    return quote(filename, safe="")


def _sep_params(separator: Optional[str]) -> Dict[str, str]:
    return {"separator": separator} if separator else {}


# -------------------------
# pandas helpers
# -------------------------
def rows_to_frame(headers: Sequence[str], rows: Sequence[Row]) -> pd.DataFrame:
    """All-string DataFrame in header order; missing cells become ''."""
    data = [[cell_to_str(r.get(h)) for h in headers] for r in rows]
    return pd.DataFrame(data, columns=list(headers), dtype=str)


def frame_to_rows(df: pd.DataFrame) -> List[Row]:
    df = df.fillna("")
    return [{str(col): cell_to_str(val) for col, val in rec.items()} for rec in df.to_dict(orient="records")]
