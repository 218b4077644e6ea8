"""CLI entry point for the NGP VAN action handler.

Usage:
    python -m ngpvan_action.action_handler.main available --organization org.json

    python -m ngpvan_action.action_handler.main choices \
        --organization org.json --output data/van_actions.json

    python -m ngpvan_action.action_handler.main process \
        --organization org.json --contact contact.json --interaction-step step.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import requests
from pydantic import BaseModel, ValidationError

from ..common.models import Contact, InteractionStep, Organization
from .handler import available, get_client_choice_data, process_action

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


def _load(model: type[BaseModel], path: str) -> BaseModel:
    return model.model_validate_json(Path(path).read_text(encoding="utf-8"))


def _run_available(args: argparse.Namespace) -> int:
    organization = _load(Organization, args.organization)
    print(json.dumps(available(organization).to_dict()))
    return 0


def _run_choices(args: argparse.Namespace) -> int:
    organization = _load(Organization, args.organization)
    choice_data = get_client_choice_data(organization)
    output = json.dumps(choice_data.to_dict(), ensure_ascii=False, indent=2)

    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(output, encoding="utf-8")
        logger.info("Action catalog saved: %s", out_path)
    else:
        print(output)

    return 1 if choice_data.is_error else 0


def _run_process(args: argparse.Namespace) -> int:
    organization = _load(Organization, args.organization)
    contact = _load(Contact, args.contact)
    step = _load(InteractionStep, args.interaction_step)

    try:
        process_action(None, step, contact.id, contact, None, organization)
    except (requests.RequestException, ValueError) as e:
        logger.error("Canvass response not recorded: %s", e)
        return 1

    logger.info("Canvass response recorded for VAN id %s", contact.external_id)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="NGP VAN action handler: report texting results and list VAN actions",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_available = subparsers.add_parser(
        "available", help="Check whether VAN credentials are configured"
    )
    p_available.add_argument("--organization", required=True, help="Organization JSON file")
    p_available.set_defaults(func=_run_available)

    p_choices = subparsers.add_parser("choices", help="Fetch the VAN action catalog")
    p_choices.add_argument("--organization", required=True, help="Organization JSON file")
    p_choices.add_argument("--output", type=str, default=None, help="Write catalog JSON here")
    p_choices.set_defaults(func=_run_choices)

    p_process = subparsers.add_parser("process", help="Post a canvass response to VAN")
    p_process.add_argument("--organization", required=True, help="Organization JSON file")
    p_process.add_argument("--contact", required=True, help="Contact JSON file")
    p_process.add_argument(
        "--interaction-step", required=True, help="Interaction step JSON file"
    )
    p_process.set_defaults(func=_run_process)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except (OSError, ValidationError) as e:
        logger.error("Could not read input: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
