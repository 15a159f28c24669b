import os
from typing import Any, Dict, List, Tuple

import requests

BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000")


class ApiError(Exception):
    """The backend rejected a request or could not be reached."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class PipelineClient:
    """Thin requests wrapper around the screener backend API."""

    def __init__(self, base_url: str = BACKEND_URL, timeout: float = 30):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, method: str, path: str, timeout: float = None, **kwargs) -> Any:
        try:
            response = requests.request(method, f"{self.base_url}{path}",
                                        timeout=timeout or self.timeout, **kwargs)
        except requests.exceptions.ConnectionError:
            raise ApiError(f"Cannot connect to the API server. Please make sure the backend is running on {self.base_url}")
        except requests.exceptions.Timeout:
            raise ApiError("Request timed out. The backend is taking longer than expected.")

        if response.status_code >= 400:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            raise ApiError(str(detail), status_code=response.status_code)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def is_live(self) -> bool:
        try:
            self._request("GET", "/", timeout=5)
            return True
        except ApiError:
            return False

    def get_pipeline(self, ranked: bool = False) -> Dict[str, Any]:
        params = {"ranked": "true"} if ranked else None
        return self._request("GET", "/pipeline", params=params)

    def get_stats(self) -> Dict[str, Any]:
        return self._request("GET", "/stats")

    def set_job_description(self, text: str) -> None:
        self._request("PUT", "/pipeline/job-description", json={"text": text})

    def upload_resumes(self, files: List[Tuple[str, bytes, str]]) -> List[Dict[str, Any]]:
        """Upload (name, data, mime_type) triples; non-PDFs are dropped by the backend."""
        if not files:
            return []
        multipart = [("files", (name, data, mime_type)) for name, data, mime_type in files]
        return self._request("POST", "/resumes", files=multipart, timeout=120)

    def remove_resume(self, entry_id: str) -> None:
        self._request("DELETE", f"/resumes/{entry_id}")

    def start_analysis(self, include_completed: bool = False) -> List[str]:
        params = {"include_completed": "true"} if include_completed else None
        return self._request("POST", "/analyze", params=params)["dispatched"]

    def reanalyze(self, entry_id: str) -> List[str]:
        return self._request("POST", f"/resumes/{entry_id}/reanalyze")["dispatched"]

    def send_chat(self, entry_id: str, message: str) -> Dict[str, Any]:
        return self._request("POST", f"/resumes/{entry_id}/chat", json={"message": message}, timeout=120)

    def load_demo(self) -> List[Dict[str, Any]]:
        return self._request("POST", "/demo")
