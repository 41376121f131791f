"""Tencent Cloud API adapter (CDN and EdgeOne).

Responsibility:
- Build the vendor SDK clients (`CdnClient`, `TeoClient`) from settings.
- Expose them through the async `CacheApiClient` contract.
- Turn `TencentCloudSDKException` into `RemoteCallError`.

The SDK is synchronous (requests based), so each call runs in a worker
thread; calls are still awaited one at a time by the dispatcher.
"""

from __future__ import annotations

import asyncio
import json
from types import ModuleType
from typing import Any

from tencentcloud.cdn.v20180606 import cdn_client, models as cdn_models
from tencentcloud.common import credential
from tencentcloud.common.exception.tencent_cloud_sdk_exception import TencentCloudSDKException
from tencentcloud.common.profile.client_profile import ClientProfile
from tencentcloud.common.profile.http_profile import HttpProfile
from tencentcloud.teo.v20220901 import models as teo_models, teo_client

from core.config import AppSettings
from core.domain.errors import ConfigurationError, RemoteCallError


class TencentCloudClient:
    """`core.interfaces.cache_api.CacheApiClient` over a Tencent Cloud SDK client.

    `operation` is the API action name (e.g. `PurgeUrlsCache`); the matching
    `<operation>Request` model is looked up in `models_module`.
    """

    def __init__(self, *, label: str, sdk_client: Any, models_module: ModuleType) -> None:
        self.label = label
        self.sdk_client = sdk_client
        self._models = models_module

    def __repr__(self) -> str:
        return f"TencentCloudClient(label={self.label!r})"

    def _call_sync(self, operation: str, params: dict[str, Any]) -> dict[str, Any]:
        request_cls = getattr(self._models, f"{operation}Request", None)
        method = getattr(self.sdk_client, operation, None)
        if request_cls is None or method is None:
            raise ValueError(f"The {self.label} API has no operation {operation}")

        request = request_cls()
        request.from_json_string(json.dumps(params, ensure_ascii=False))
        try:
            response = method(request)
        except TencentCloudSDKException as exc:
            raise RemoteCallError(
                exc.get_message() or str(exc),
                code=exc.get_code() or None,
                request_id=exc.get_request_id() or None,
            ) from exc
        return json.loads(response.to_json_string())

    async def call(self, operation: str, params: dict[str, Any]) -> dict[str, Any]:
        return await asyncio.to_thread(self._call_sync, operation, params)


def build_credential(settings: AppSettings) -> credential.Credential:
    if not settings.has_credentials():
        raise ConfigurationError(
            "Missing credentials: set the secret_id and secret_key inputs "
            "(INPUT_SECRET_ID / INPUT_SECRET_KEY)."
        )
    return credential.Credential(
        settings.secret_id.get_secret_value(),  # type: ignore[union-attr]
        settings.secret_key.get_secret_value(),  # type: ignore[union-attr]
    )


def _client_profile(settings: AppSettings, endpoint: str) -> ClientProfile:
    http_profile = HttpProfile(
        endpoint=endpoint,
        reqTimeout=max(1, int(settings.http_timeout_seconds)),
    )
    return ClientProfile(httpProfile=http_profile)


def build_cdn_client(settings: AppSettings) -> TencentCloudClient:
    sdk_client = cdn_client.CdnClient(
        build_credential(settings),
        settings.region,
        _client_profile(settings, settings.cdn_endpoint),
    )
    return TencentCloudClient(label="CDN", sdk_client=sdk_client, models_module=cdn_models)


def build_teo_client(settings: AppSettings) -> TencentCloudClient:
    sdk_client = teo_client.TeoClient(
        build_credential(settings),
        settings.region,
        _client_profile(settings, settings.teo_endpoint),
    )
    return TencentCloudClient(label="EdgeOne", sdk_client=sdk_client, models_module=teo_models)
