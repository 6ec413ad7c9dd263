"""Command-line entrypoint for the wardrobe planner."""

from __future__ import annotations

import argparse
import json
from typing import List, Optional

from wardrobe_app.app import WardrobeApp


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Plan outfits from your wardrobe")
    commands = parser.add_subparsers(dest="command", required=True)

    suggest = commands.add_parser("suggest", help="Suggest an outfit")
    suggest.add_argument("--occasion", help="casual, work, formal, athletic or special")
    suggest.add_argument("--season", help="Defaults to the current season.")
    suggest.add_argument("--weather", help="Free-form; 'cold' adds outerwear.")
    suggest.add_argument("--mood")
    suggest.add_argument("--color", action="append", default=[], dest="colors")
    suggest.add_argument("--exclude", action="append", default=[], dest="exclude_items")
    suggest.add_argument("--style-preference", dest="style_preference")
    suggest.add_argument("--save", action="store_true", help="Save the suggestion as an outfit.")

    commands.add_parser("stats", help="Show wardrobe statistics")

    plan = commands.add_parser("plan", help="List outfits planned for a date")
    plan.add_argument("date", help="Calendar date as YYYY-MM-DD")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = _build_parser().parse_args(argv)
    app = WardrobeApp()
    repository = app.repository

    if args.command == "stats":
        print(json.dumps(repository.stats(), indent=2))
        return

    if args.command == "plan":
        for plan in repository.get_planned_outfits_by_date(args.date):
            outfit = repository.get_outfit_by_id(plan.outfit_id)
            label = outfit.name if outfit else f"missing outfit {plan.outfit_id}"
            print(f"{plan.date}  {label}  {plan.event or ''}".rstrip())
        return

    request = {
        "occasion": args.occasion,
        "season": args.season,
        "weather": args.weather,
        "mood": args.mood,
        "colors": args.colors,
        "exclude_items": args.exclude_items,
        "style_preference": args.style_preference,
    }
    suggestion = app.suggest(request, current_season=True)
    if not suggestion.usable:
        print("No usable suggestion for these constraints.")
        return
    for item_id in suggestion.item_ids:
        item = repository.get_item_by_id(item_id)
        if item:
            print(f"- {item.name} ({item.category})")
    if args.save:
        outfit = app.save_suggestion(request, suggestion)
        if outfit:
            print(f"Saved as '{outfit.name}' ({outfit.outfit_id})")


if __name__ == "__main__":
    main()
