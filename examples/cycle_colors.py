"""Scan for a LightPlay toy and cycle its lights through the palette.

Usage:
    uv run python examples/cycle_colors.py
    uv run python examples/cycle_colors.py --address AA:BB:CC:DD:EE:FF --fade
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from lightplay import CONCRETE_COLORS, LightColor, LightPlayDevice, LightPort


async def _run(args: argparse.Namespace) -> int:
    device = LightPlayDevice(args.address)

    if args.address is None:
        found = await device.scan(timeout=args.scan_timeout)
        if not found:
            print("No LightPlay devices found")
            return 1
        for ble_device in found:
            print(f"Found {ble_device.name} ({ble_device.address})")
        await device.connect(found[0])
    else:
        await device.connect()

    port = LightPort.from_value(args.port)
    command = device.fade_to_color if args.fade else device.set_color

    try:
        for _ in range(args.rounds):
            for color in CONCRETE_COLORS:
                print(f"{port.value} -> {color.value}")
                await command(port, color)
                await asyncio.sleep(args.hold)
        await command(port, LightColor.SURPRISE)
        print(f"{port.value} -> surprise ({device.get_light_color(port)})")
        await asyncio.sleep(args.hold)
        await device.fade_off(port)
    finally:
        await device.disconnect()

    print(f"Dropped sends: {device.dropped_sends}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--address", help="Device MAC address (default: scan)")
    parser.add_argument(
        "--port",
        default=LightPort.ALL.value,
        choices=[p.value for p in LightPort],
        help="Light to drive (default: all lights)",
    )
    parser.add_argument("--fade", action="store_true", help="Fade instead of switching")
    parser.add_argument("--rounds", type=int, default=1, help="Palette cycles (default: 1)")
    parser.add_argument("--hold", type=float, default=1.0, help="Seconds per color (default: 1)")
    parser.add_argument("--scan-timeout", type=float, default=10.0, help="Scan duration in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        return asyncio.run(_run(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
