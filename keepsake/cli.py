"""CLI entry point for the keepsake explorer."""

import argparse
import json
import logging
from pathlib import Path

from keepsake.catalog import owner_profile
from keepsake.config import load_config
from keepsake.explorer import load_state, scrub_timeline, switch_mode, tick
from keepsake.models import Mode

MODE_CHOICES = [m.value for m in Mode]


def main() -> None:
    parser = argparse.ArgumentParser(description="Keepsake shelter object explorer")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    sub = parser.add_subparsers(dest="command")

    # modes command
    sub.add_parser("modes", help="List arrangement modes")

    # catalog command
    sub.add_parser("catalog", help="List items with their attributes")

    # layout command
    layout_parser = sub.add_parser("layout", help="Print target transforms for a mode")
    layout_parser.add_argument("mode", choices=MODE_CHOICES)
    layout_parser.add_argument("--json", action="store_true", help="Output JSON")

    # play command
    play_parser = sub.add_parser("play", help="Simulate timeline playback")
    play_parser.add_argument(
        "--seconds", type=float, default=None,
        help="Simulated seconds (defaults to one full loop)",
    )
    play_parser.add_argument("--fps", type=float, default=30.0)

    # snapshot command
    snap_parser = sub.add_parser("snapshot", help="Settle a mode and render it to PNG")
    snap_parser.add_argument("mode", choices=MODE_CHOICES)
    snap_parser.add_argument("--out", type=Path, default=Path("snapshot.png"))
    snap_parser.add_argument(
        "--progress", type=float, default=None,
        help="Timeline position (0-1) for time mode",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "modes":
        for mode in Mode:
            print(f"  {mode.value:<10} {mode.display_name}")
        return

    state = load_state(config)

    if args.command == "catalog":
        for item in state.items:
            r = item.record
            print(
                f"  {item.name:<22} size={r.size:<4g} sentiment={r.sentimentality:<4g} "
                f"price={r.price:<4g} owner={owner_profile(r.owner).name:<6} "
                f"alerts=[{r.enter_alert_index}, {item.exit_alert_index})"
            )
        print(f"\nTotal: {len(state.items)} items")

    elif args.command == "layout":
        switch_mode(state, args.mode, now=0.0)
        targets = {item.name: item.target for item in state.items}
        if args.json:
            print(json.dumps({
                name: {"x": t.x, "y": t.y, "width": t.width, "height": t.height}
                for name, t in targets.items()
            }, indent=2))
        else:
            for name, t in targets.items():
                print(f"  {name:<22} x={t.x:8.1f} y={t.y:8.1f} w={t.width:6.1f} h={t.height:6.1f}")

    elif args.command == "play":
        from keepsake.playback import simulate_playback

        seconds = args.seconds
        if seconds is None:
            seconds = config.timeline.playback_duration_seconds
        report = simulate_playback(state, seconds, fps=args.fps)
        print(report)
        for alert in sorted(report.visible_by_alert):
            count = report.visible_by_alert[alert]
            print(f"  alert {alert:>3}: {count:>3} visible {'#' * count}")

    elif args.command == "snapshot":
        from keepsake.playback import settle
        from keepsake.render import render_frame

        switch_mode(state, args.mode, now=0.0)
        if args.progress is not None:
            scrub_timeline(state, args.progress, now=0.0)
        frame, now = settle(state)
        frame = tick(state, now)
        image = render_frame(
            frame,
            int(state.camera.screen_width),
            int(state.camera.screen_height),
            assets_dir=config.resolved_assets_dir,
        )
        image.convert("RGB").save(args.out)
        print(f"Output: {args.out}")

    else:
        parser.print_help()


if __name__ == "__main__":
    main()
