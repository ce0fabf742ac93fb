"""
OmniFocus removal package.
Finds and deletes a single task or project through AppleScript.
"""

from .apple_script_client import AppleScriptExecutionError, ScriptResult, run_applescript
from .applescript_escaping import escape_for_applescript, legacy_escape
from .data_models import ItemType, RemovalOutcome, RemovalRequest
from .remove_item import generate_remove_script, lookup_stages, parse_remove_result, remove_item

__all__ = [
    'AppleScriptExecutionError',
    'ScriptResult',
    'run_applescript',
    'escape_for_applescript',
    'legacy_escape',
    'ItemType',
    'RemovalOutcome',
    'RemovalRequest',
    'generate_remove_script',
    'lookup_stages',
    'parse_remove_result',
    'remove_item',
]
