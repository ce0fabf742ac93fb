"""
Handles the logic for the 'remove' command.
"""
import json
from typing import Optional

from rich.console import Console

from omnifocus_removal.data_models import RemovalOutcome, RemovalRequest
from omnifocus_removal.remove_item import generate_remove_script, remove_item
from utils.logger import get_logger

log = get_logger(__name__)


def handle_remove(args) -> Optional[RemovalOutcome]:
    """Remove one task or project and report the outcome.

    ``args`` carries ``item_type``, ``id``, ``name``, ``dry_run`` and ``as_json``.
    With ``dry_run`` the generated AppleScript is printed, nothing runs and
    None is returned.
    """
    console = Console()
    request = RemovalRequest(item_type=args.item_type, id=args.id, name=args.name)

    if args.dry_run:
        print(generate_remove_script(request))
        return None

    outcome = remove_item(request, logger=log)

    if args.as_json:
        print(json.dumps(outcome.to_dict()))
    elif outcome.success:
        console.print(
            f"✅ Removed {request.item_type.value} '{outcome.name}' (ID: {outcome.id})",
            style="green",
            markup=False,
        )
    else:
        console.print(f"❌ Could not remove {request.item_type.value}: {outcome.error}", style="red", markup=False)
    return outcome
