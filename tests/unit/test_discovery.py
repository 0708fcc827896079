"""Test LightPlay device discovery."""

from types import SimpleNamespace

import pytest

from lightplay import discovery
from lightplay.protocol import SERVICE_UUID


@pytest.mark.asyncio
async def test_discover_devices_filters_on_service(monkeypatch):
    """discover_devices should only ask bleak for LightPlay peripherals."""
    calls = {}
    found = [SimpleNamespace(address="AA:BB:CC:DD:EE:FF", name="LightPlay")]

    async def _discover(**kwargs):
        calls.update(kwargs)
        return found

    monkeypatch.setattr(discovery, "BleakScanner", SimpleNamespace(discover=_discover))

    result = await discovery.discover_devices(timeout=2.5)

    assert result == found
    assert calls == {"timeout": 2.5, "service_uuids": [SERVICE_UUID]}
