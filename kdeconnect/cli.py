"""
Command-line interface for the KDE Connect client.
"""

import argparse
import sys

# Ensure logging subsystem is initialised immediately
import kdeconnect.core.log  # noqa: F401

from . import __version__
from kdeconnect.core import config
from kdeconnect.core.errors import KDEConnectError
from kdeconnect.core.log import print_and_log, set_level, LOG__USER, LOG__DEBUG

_MEDIA_ACTIONS = {
    "play": "play",
    "pause": "pause",
    "play-pause": "play_pause",
    "stop": "stop",
    "next": "next",
    "previous": "previous",
}


def parse_args(args=None):
    parser = argparse.ArgumentParser(
        description="kdeconnect - talk to phones paired with the KDE Connect daemon"
    )
    parser.add_argument("--version", action="version", version=f"kdeconnect {__version__}")
    parser.add_argument("--config", help="YAML settings file (default: ~/.config/kdeconnect/config.yaml)")

    subparsers = parser.add_subparsers(dest="mode", help="Operation mode")

    list_parser = subparsers.add_parser("list", help="List devices known to the daemon")
    list_parser.add_argument("--reachable", action="store_true", help="Only reachable devices")
    list_parser.add_argument("--trusted", action="store_true", help="Only trusted devices")

    ping_parser = subparsers.add_parser("ping", help="Send a ping")
    ping_parser.add_argument("device", help="Device id or name")
    ping_parser.add_argument("message", nargs="?", default=None, help="Optional ping message")

    ring_parser = subparsers.add_parser("ring", help="Make the phone ring")
    ring_parser.add_argument("device", help="Device id or name")

    share_parser = subparsers.add_parser("share", help="Share a file, URL or text")
    share_parser.add_argument("device", help="Device id or name")
    share_parser.add_argument("target", help="Local file path or URL")
    share_parser.add_argument("--text", action="store_true", help="Send TARGET as clipboard text")

    notif_parser = subparsers.add_parser("notifications", help="List active notifications")
    notif_parser.add_argument("device", help="Device id or name")
    notif_parser.add_argument("--dismiss", metavar="ID", help="Dismiss the notification with this id")

    media_parser = subparsers.add_parser("media", help="Show or control the remote media player")
    media_parser.add_argument("device", help="Device id or name")
    media_parser.add_argument("action", nargs="?", choices=sorted(_MEDIA_ACTIONS), help="Transport action")
    media_parser.add_argument("--monitor", action="store_true", help="Keep printing player updates")
    media_parser.add_argument("--interval", type=int, default=config.MEDIA_POLL_INTERVAL,
                              help="Polling interval in seconds (with --monitor)")

    pair_parser = subparsers.add_parser("pair", help="Request pairing with a device")
    pair_parser.add_argument("device", help="Device id or name")

    unpair_parser = subparsers.add_parser("unpair", help="Unpair a device")
    unpair_parser.add_argument("device", help="Device id or name")

    watch_parser = subparsers.add_parser("watch", help="Print device events until interrupted")
    answer = watch_parser.add_mutually_exclusive_group()
    answer.add_argument("--accept-pairing", action="store_true", help="Accept incoming pair requests")
    answer.add_argument("--reject-pairing", action="store_true", help="Reject incoming pair requests")

    return parser.parse_args(args)


def _bus(args):
    from kdeconnect.dbuslayer.bus import KDEConnectBus

    settings = config.load_settings(args.config)
    return KDEConnectBus(service=settings.service, root=settings.root)


def _find(args, bus):
    from kdeconnect.dbuslayer.manager import find_device

    device = find_device(args.device, bus)
    if device is None:
        print(f"[-] No device named or with id {args.device!r}", file=sys.stderr)
    return device


def _ms_to_minutes_seconds(ms) -> str:
    seconds = int(ms or 0) // 1000
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def _media_line(media) -> str:
    state = "playing" if media.is_playing else "paused"
    progress = f"{_ms_to_minutes_seconds(media.position)} / {_ms_to_minutes_seconds(media.length)}"
    return f"[{state}] {media.now_playing or '-'} {progress}"


def _run_loop():
    from gi.repository import GLib

    loop = GLib.MainLoop()
    try:
        loop.run()
    except KeyboardInterrupt:
        loop.quit()
    return loop


def _cmd_list(args, bus) -> int:
    from kdeconnect.dbuslayer.manager import list_devices

    devices = list_devices(bus, only_reachable=args.reachable, only_trusted=args.trusted)
    if not devices:
        print_and_log("[!] No devices found", LOG__USER)
        return 0
    for device in devices:
        line = f"{device.id}  {device.name} ({device.type})  reachable={device.is_reachable} trusted={device.is_trusted}"
        if device.battery is not None:
            line += f"  battery={device.battery.charge}%{' charging' if device.battery.charging else ''}"
        if device.connectivity is not None:
            line += f"  network={device.connectivity.type}/{device.connectivity.strength}"
        print(line)
    return 0


def _cmd_notifications(args, device) -> int:
    notifications = device.get_notifications()
    if args.dismiss is not None:
        for notification in notifications:
            if notification.notification_id == args.dismiss:
                if notification.dismiss():
                    print_and_log(f"[+] Dismissed {args.dismiss}", LOG__USER)
                    return 0
                print_and_log(f"[-] Notification {args.dismiss} cannot be dismissed", LOG__USER)
                return 1
        print_and_log(f"[-] No active notification {args.dismiss}", LOG__USER)
        return 1

    for notification in notifications:
        print(f"{notification.notification_id}  [{notification.app_name}] {notification.title}: {notification.text}")
    return 0


def _cmd_media(args, device) -> int:
    media = device.media
    if args.action:
        getattr(media, _MEDIA_ACTIONS[args.action])()
        print_and_log(f"[+] Sent {args.action} to {device.name}", LOG__USER)
        return 0

    media.update()
    print(_media_line(media))
    if not args.monitor:
        return 0

    from gi.repository import GLib

    media.events.on("onMediaPlayerUpdated", lambda: print(_media_line(media)))

    # Play progress is not pushed by the daemon; poll while playing
    def _poll():
        if media.is_playing:
            try:
                media.update()
            except KDEConnectError as e:
                print_and_log(f"[-] {e}", LOG__DEBUG)
        return True

    GLib.timeout_add_seconds(max(1, args.interval), _poll)
    _run_loop()
    return 0


def _cmd_watch(args, bus) -> int:
    from kdeconnect.dbuslayer.manager import list_devices

    devices = list_devices(bus)

    def _printer(device, event):
        return lambda *values: print(f"{device.name}: {event} {' '.join(str(v) for v in values)}")

    def _on_pairing(device):
        def handler(request):
            print(f"{device.name}: pairing requested")
            if args.accept_pairing:
                request.accept()
                print_and_log(f"[+] Accepted pairing with {device.name}", LOG__USER)
            elif args.reject_pairing:
                request.reject()
                print_and_log(f"[*] Rejected pairing with {device.name}", LOG__USER)
        return handler

    for device in devices:
        for event in ("onReachableChanged", "onTrustedChanged", "onNameChanged", "onTypeChanged",
                      "onBatteryChanged", "onConnectivityChanged"):
            device.events.on(event, _printer(device, event))
        device.events.on("onPairingRequest", _on_pairing(device))

    print_and_log(f"[*] Watching {len(devices)} device(s); Ctrl-C to stop", LOG__USER)
    _run_loop()
    for device in devices:
        device.close()
    return 0


def main(args=None):
    """Main entry point for the kdeconnect CLI."""
    args = parse_args(args)

    settings = config.load_settings(args.config)
    set_level(settings.log_level)

    if not args.mode:
        print("[-] No mode given; see --help", file=sys.stderr)
        return 1

    import dbus

    try:
        bus = _bus(args)

        if args.mode == "list":
            return _cmd_list(args, bus)
        if args.mode == "watch":
            return _cmd_watch(args, bus)

        device = _find(args, bus)
        if device is None:
            return 1

        if args.mode == "ping":
            device.ping(args.message)
        elif args.mode == "ring":
            device.ring()
        elif args.mode == "share":
            if args.text:
                device.share_text(args.target)
            elif "://" in args.target:
                device.share_url(args.target)
            else:
                device.share_file(args.target)
        elif args.mode == "notifications":
            return _cmd_notifications(args, device)
        elif args.mode == "media":
            return _cmd_media(args, device)
        elif args.mode == "pair":
            device.request_pair()
        elif args.mode == "unpair":
            device.unpair()

        print_and_log(f"[+] {args.mode} sent to {device.name}", LOG__USER)
        return 0

    except KDEConnectError as e:
        print(f"[-] {e}", file=sys.stderr)
        return 1
    except dbus.exceptions.DBusException as e:
        print(f"[-] D-Bus error: {e.get_dbus_message() or e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
