from __future__ import annotations

import math
from typing import Optional

import httpx

from models.errors import TransientReadFailure


class HttpSensorReader:
    """Reads environmental values from a sensor gateway over HTTP.

    The gateway answers ``GET /readings/<name>`` with ``{"value": <number>}``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 2.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"), timeout=timeout, transport=transport
        )

    def close(self) -> None:
        self._client.close()

    def read_temperature(self) -> float:
        return self._read("temperature")

    def read_humidity(self) -> float:
        return self._read("humidity")

    def read_light_level(self) -> float:
        return self._read("light")

    def _read(self, name: str) -> float:
        try:
            response = self._client.get(f"/readings/{name}")
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise TransientReadFailure(
                name, f"gateway returned {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TransientReadFailure(name, f"gateway unreachable: {exc}") from exc
        except ValueError as exc:
            raise TransientReadFailure(name, "gateway returned invalid JSON") from exc

        value = payload.get("value") if isinstance(payload, dict) else None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TransientReadFailure(name, "gateway payload has no numeric value")
        value = float(value)
        if not math.isfinite(value):
            raise TransientReadFailure(name, "gateway returned a non-finite value")
        return value
