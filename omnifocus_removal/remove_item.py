"""Remove a single task or project from OmniFocus.

The removal runs as one generated AppleScript.  It looks the item up by id
and then by name, deleting the first match, and prints a one-line JSON result
which :func:`parse_remove_result` turns back into a :class:`RemovalOutcome`.
"""
import logging
from typing import Any, Callable, List, Mapping, NamedTuple, Optional, Union

from pydantic import ValidationError

from .apple_script_client import ScriptResult, run_applescript
from .applescript_escaping import escape_for_applescript
from .data_models import ItemType, RemovalOutcome, RemovalPayload, RemovalRequest

_logger = logging.getLogger(__name__)

MISSING_IDENTIFIER_ERROR = "Either id or name must be provided"
NOT_FOUND_ERROR = "Item not found"
UNKNOWN_ERROR = "Unknown error in remove_item"

# OmniFocus "can't get"/"invalid index" errors raised by an empty `first ... where`.
# A lookup stage treats only these as "no match"; any other error aborts the
# remaining stages and is reported by the outer handler.
NOT_FOUND_ERROR_NUMBERS = (-1728, -1719)

_SEARCH_COLLECTIONS = {
    ItemType.TASK: ("flattened task", "inbox task"),
    ItemType.PROJECT: ("flattened project",),
}

_PREVIEW_LINES = 10

Executor = Callable[[str], Union[ScriptResult, str]]


class LookupStage(NamedTuple):
    collection: str
    field: str
    value: str


def _as_literal(text: str) -> str:
    return f'"{escape_for_applescript(text)}"'


def _json_literal(**payload: Any) -> str:
    """AppleScript string literal holding a compact JSON object."""
    parts = []
    for key, value in payload.items():
        value = "true" if value is True else "false" if value is False else f'"{value}"'
        parts.append(f'"{key}":{value}')
    return _as_literal("{" + ",".join(parts) + "}")


MISSING_IDENTIFIER_SCRIPT = f"return {_json_literal(success=False, error=MISSING_IDENTIFIER_ERROR)}"

_SCRIPT_HEADER = """use framework "Foundation"

property NSString : a reference to current application's NSString
property NSJSONSerialization : a reference to current application's NSJSONSerialization

on escapeForJSON(theText)
  if theText is "" then return ""
  set nsStr to NSString's stringWithString:theText
  set jsonData to NSJSONSerialization's dataWithJSONObject:{nsStr} options:0 |error|:(missing value)
  set jsonArrayString to (NSString's alloc()'s initWithData:jsonData encoding:4) as text
  return text 3 thru -3 of jsonArrayString
end escapeForJSON
"""

_STAGE_TEMPLATE = """
      -- Search {collection}s by {field}
      if foundItem is missing value then
        try
          set foundItem to first {collection} where {field} = {literal}
        on error errMsg number errNum
          if {{{not_found}}} does not contain errNum then error errMsg number errNum
        end try
      end if
"""

_SCRIPT_BODY = """
try
  tell application "OmniFocus"
    tell front document
      set foundItem to missing value
{stages}
      if foundItem is missing value then
        return {not_found}
      end if

      set itemName to name of foundItem
      set itemId to id of foundItem as string
      delete foundItem

      return {success_open} & itemId & {success_middle} & my escapeForJSON(itemName) & {close}
    end tell
  end tell
on error errorMessage
  return {error_open} & my escapeForJSON(errorMessage) & {close}
end try
"""


def lookup_stages(request: RemovalRequest) -> List[LookupStage]:
    """Ordered search plan: every id stage, then every name stage.

    Tasks are looked up in the flattened task tree before the inbox; projects
    only in the flattened project list.
    """
    collections = _SEARCH_COLLECTIONS[request.item_type]
    stages = []
    for field, value in (("id", request.id), ("name", request.name)):
        if value:
            stages.extend(LookupStage(collection, field, value) for collection in collections)
    return stages


def _render_stage(stage: LookupStage) -> str:
    return _STAGE_TEMPLATE.format(
        collection=stage.collection,
        field=stage.field,
        literal=_as_literal(stage.value),
        not_found=", ".join(str(n) for n in NOT_FOUND_ERROR_NUMBERS),
    )


def generate_remove_script(request: RemovalRequest) -> str:
    """Generate the AppleScript that finds and deletes the requested item."""
    if not escape_for_applescript(request.id) and not escape_for_applescript(request.name):
        return MISSING_IDENTIFIER_SCRIPT

    stages = "".join(_render_stage(stage) for stage in lookup_stages(request))
    body = _SCRIPT_BODY.format(
        stages=stages.rstrip("\n"),
        not_found=_json_literal(success=False, error=NOT_FOUND_ERROR),
        success_open=_as_literal('{"success":true,"id":"'),
        success_middle=_as_literal('","name":"'),
        error_open=_as_literal('{"success":false,"error":"'),
        close=_as_literal('"}'),
    )
    return _SCRIPT_HEADER + body


def _payload_outcome(stdout: str) -> Optional[RemovalOutcome]:
    try:
        return RemovalPayload.model_validate_json(stdout).to_outcome()
    except ValidationError:
        return None


def parse_remove_result(stdout: str, logger: Optional[logging.Logger] = None) -> RemovalOutcome:
    """Map the script's JSON output to an outcome; anything else is a parse failure."""
    log = logger or _logger
    outcome = _payload_outcome(stdout or "")
    if outcome is None:
        log.error("Error parsing AppleScript result: %r", stdout)
        return RemovalOutcome.failed(f"Failed to parse result: {stdout}")
    return outcome


def _preview(script: str) -> str:
    return "\n".join(script.split("\n")[:_PREVIEW_LINES]) + "\n..."


def remove_item(
    request: Union[RemovalRequest, Mapping[str, Any]],
    executor: Optional[Executor] = None,
    logger: Optional[logging.Logger] = None,
) -> RemovalOutcome:
    """Remove a task or project from OmniFocus.

    Every failure, including a broken executor, comes back as an outcome with
    ``success=False``; nothing is raised to the caller.
    """
    log = logger or _logger
    run = executor or run_applescript

    if not isinstance(request, RemovalRequest):
        try:
            request = RemovalRequest.from_dict(request)
        except (ValueError, TypeError, AttributeError) as e:
            log.error("Invalid removal request %r: %s", request, e)
            return RemovalOutcome.failed(f"Invalid removal request: {e}")

    if not request.has_identifier():
        log.warning("Refusing to run removal without id or name")
        return RemovalOutcome.failed(MISSING_IDENTIFIER_ERROR)

    script = generate_remove_script(request)
    log.info("Executing AppleScript for removal...")
    log.debug(
        "Item type: %s, ID: %s, Name: %s",
        request.item_type.value,
        request.id or "not provided",
        request.name or "not provided",
    )
    log.debug("AppleScript preview:\n%s", _preview(script))

    try:
        result = run(script)
    except Exception as e:
        log.error("Error in remove_item execution: %s", e)
        if "syntax error" in str(e):
            log.error("This appears to be an AppleScript syntax error. Review the script generation logic.")
        captured = getattr(e, "stdout", "")
        if isinstance(captured, str) and captured:
            outcome = _payload_outcome(captured)
            if outcome is not None:
                return outcome
        return RemovalOutcome.failed(str(e) or UNKNOWN_ERROR)

    if isinstance(result, str):
        stdout, stderr = result, ""
    else:
        stdout, stderr = result.stdout, result.stderr
    if stderr:
        log.warning("AppleScript stderr: %s", stderr)
    log.debug("AppleScript stdout: %s", stdout)

    return parse_remove_result(stdout, logger=log)
