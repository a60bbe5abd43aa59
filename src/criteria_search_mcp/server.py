#!/usr/bin/env python3
"""MCP Server for building criteria and searching tabular JSON datasets using FastMCP.

This server loads a JSON array of records from a URL, lets a client assemble a
nested AND-of-ORs filter expression over its fields, and evaluates it.
"""

import json
import logging
import secrets
from dataclasses import dataclass, field
from typing import Annotated

from dotenv import load_dotenv
from fastmcp import FastMCP

from .api.url_service import Result, UrlService
from .constants import API_BASE_URL, ERROR_MESSAGES, HELPER_TEXT
from .criteria import CriteriaBuilder, Operator, SearchManager, SearchOptions
from .utils.decorators import handle_tool_errors

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

mcp: FastMCP = FastMCP(
    "criteria-search-mcp",
    instructions="Load a JSON dataset, build AND/OR filter criteria over its fields and search it.",
)


@dataclass
class Session:
    """Per-token state: the loaded dataset and the criteria being edited."""

    result: Result = field(default_factory=Result.empty)
    builder: CriteriaBuilder = field(default_factory=CriteriaBuilder)


# Auth token storage - stores valid authentication tokens
auth_tokens: set[str] = set()

# Session storage keyed by auth token - in production, use a proper session store
sessions: dict[str, Session] = {}

# Search manager shared by all sessions; it holds no per-search state
search_manager = SearchManager()

AUTH_TOKEN_DESCRIPTION = "Authentication token obtained from get_auth_token(). Required for this function to work."


def validate_auth_token(token: str) -> bool:
    """Validate if the provided auth token is valid."""
    return token in auth_tokens


def get_session(token: str) -> Session:
    """Return the session for a token, creating it on first use."""
    return sessions.setdefault(token, Session())


def auth_error() -> str:
    return json.dumps({"success": False, "error": "auth_failed", "message": ERROR_MESSAGES["auth_failed"]}, indent=2)


def criteria_response(session: Session, **extra: object) -> str:
    """JSON view of a session's criteria group."""
    response = {
        "success": True,
        "criteria": session.builder.criteria_group.to_list(),
        "criteria_lists": session.builder.criteria_group.size(),
        "columns": session.result.columns,
        **extra,
    }
    return json.dumps(response, indent=2, default=str)


def get_auth_token() -> str:
    """Generate and return a new authentication token (session ID) that must be used for all other function calls.

    This is the FIRST function you must call before using any other functions in this MCP server.
    Each token owns its own dataset and criteria; tokens never share criteria.

    Returns:
        str: A secure, randomly generated authentication token
    """
    token = secrets.token_hex(32)
    auth_tokens.add(token)
    sessions[token] = Session()
    return f"Authentication successful. Your auth token is: {token}"


@handle_tool_errors
def get_operators(
    auth_token: Annotated[str, AUTH_TOKEN_DESCRIPTION],
) -> str:
    """List the comparison operators usable in filters.

    REQUIRES AUTHENTICATION: You must provide a valid auth_token obtained from get_auth_token().
    """
    if not validate_auth_token(auth_token):
        return auth_error()

    operators = [{"code": operator.name, "label": operator.value} for operator in Operator]
    return json.dumps({"success": True, "operators": operators}, indent=2)


@handle_tool_errors
def load_dataset(
    auth_token: Annotated[str, AUTH_TOKEN_DESCRIPTION],
    url: Annotated[str, HELPER_TEXT] = API_BASE_URL,
) -> str:
    """Load a dataset and start a fresh criteria group with one blank filter.

    REQUIRES AUTHENTICATION: You must provide a valid auth_token obtained from get_auth_token().

    On failure the session's dataset and criteria are emptied.
    """
    if not validate_auth_token(auth_token):
        return auth_error()

    session = get_session(auth_token)
    session.builder.criteria_group.clear()

    try:
        session.result = UrlService(url).fetch_result()
    except Exception:
        session.result = Result.empty()
        session.builder = CriteriaBuilder()
        raise

    session.builder.reset(session.result.columns)
    return criteria_response(session, url=url.strip(), total_count=len(session.result.data))


@handle_tool_errors
def get_criteria(
    auth_token: Annotated[str, AUTH_TOKEN_DESCRIPTION],
) -> str:
    """Show the current criteria: a list of OR-groups that are combined with AND.

    REQUIRES AUTHENTICATION: You must provide a valid auth_token obtained from get_auth_token().
    """
    if not validate_auth_token(auth_token):
        return auth_error()

    return criteria_response(get_session(auth_token))


@handle_tool_errors
def add_criteria_list(
    auth_token: Annotated[str, AUTH_TOKEN_DESCRIPTION],
) -> str:
    """Add a new OR-group (combined with the others using AND) holding one blank filter.

    REQUIRES AUTHENTICATION: You must provide a valid auth_token obtained from get_auth_token().
    """
    if not validate_auth_token(auth_token):
        return auth_error()

    session = get_session(auth_token)
    index = session.builder.add_criteria_list()
    return criteria_response(session, criteria_list_index=index)


@handle_tool_errors
def add_criteria(
    auth_token: Annotated[str, AUTH_TOKEN_DESCRIPTION],
    criteria_list_index: Annotated[int, "Index of the OR-group to add the filter to"],
    index: Annotated[int, "Index of the filter after which the new filter is inserted (-1 to prepend)"],
) -> str:
    """Insert a blank filter into an OR-group, right after an existing filter.

    REQUIRES AUTHENTICATION: You must provide a valid auth_token obtained from get_auth_token().
    """
    if not validate_auth_token(auth_token):
        return auth_error()

    session = get_session(auth_token)
    new_filter = session.builder.add_criteria(criteria_list_index, index)
    return criteria_response(session, added=new_filter.to_dict())


@handle_tool_errors
def remove_criteria(
    auth_token: Annotated[str, AUTH_TOKEN_DESCRIPTION],
    criteria_list_index: Annotated[int, "Index of the OR-group holding the filter"],
    index: Annotated[int, "Index of the filter to remove"],
) -> str:
    """Remove a filter. An OR-group left without filters is removed too.

    REQUIRES AUTHENTICATION: You must provide a valid auth_token obtained from get_auth_token().
    """
    if not validate_auth_token(auth_token):
        return auth_error()

    session = get_session(auth_token)
    session.builder.remove_criteria(criteria_list_index, index)
    return criteria_response(session)


@handle_tool_errors
def update_criteria(
    auth_token: Annotated[str, AUTH_TOKEN_DESCRIPTION],
    criteria_list_index: Annotated[int, "Index of the OR-group holding the filter"],
    index: Annotated[int, "Index of the filter to update"],
    left_condition: Annotated[str, "Field name (dotted paths walk nested objects). Leave empty to keep."] = "",
    operator: Annotated[str, "Operator code or label: EQ, GT, LT, C, NC, RGX. Leave empty to keep."] = "",
    value: Annotated[str | None, "Value to compare against. Omit to keep."] = None,
) -> str:
    """Change the field, operator and/or value of a filter.

    REQUIRES AUTHENTICATION: You must provide a valid auth_token obtained from get_auth_token().

    Filters with an empty field or value are ignored by searches.
    """
    if not validate_auth_token(auth_token):
        return auth_error()

    session = get_session(auth_token)
    builder = session.builder
    warnings = []

    if left_condition:
        builder.change_left_condition(criteria_list_index, index, left_condition)
    if operator:
        builder.change_operator(criteria_list_index, index, operator)
    if value is not None:
        message = builder.change_value(criteria_list_index, index, value)
        if message:
            warnings.append(message)

    return criteria_response(session, warnings=warnings)


@handle_tool_errors
def clear_criteria(
    auth_token: Annotated[str, AUTH_TOKEN_DESCRIPTION],
) -> str:
    """Remove every OR-group, so that searches return the whole dataset.

    REQUIRES AUTHENTICATION: You must provide a valid auth_token obtained from get_auth_token().
    """
    if not validate_auth_token(auth_token):
        return auth_error()

    session = get_session(auth_token)
    session.builder.criteria_group.clear()
    return criteria_response(session)


@handle_tool_errors
def search_dataset(
    auth_token: Annotated[str, AUTH_TOKEN_DESCRIPTION],
    criteria: Annotated[
        str,
        "Optional JSON criteria overriding the session's: a list of OR-groups, each a list of "
        '{"left_condition", "operator", "value"} objects. Leave empty to use the session criteria.',
    ] = "",
    case_sensitive: Annotated[bool, "Compare strings case-sensitively"] = False,
) -> str:
    """Search the loaded dataset: a record is kept when every OR-group has a matching filter.

    REQUIRES AUTHENTICATION: You must provide a valid auth_token obtained from get_auth_token().
    """
    if not validate_auth_token(auth_token):
        return auth_error()

    session = get_session(auth_token)
    if not session.result.data:
        raise ValueError(ERROR_MESSAGES["no_dataset"])

    options = SearchOptions(case_sensitive=case_sensitive)
    if criteria:
        result = search_manager.search_from_json(session.result.data, criteria, options)
    else:
        result = search_manager.search(session.result.data, session.builder.snapshot(), options)

    return json.dumps(search_manager.format_response(result), indent=2, default=str)


@handle_tool_errors
def search_records(
    auth_token: Annotated[str, AUTH_TOKEN_DESCRIPTION],
    data: Annotated[str, "JSON array of records to search"],
    criteria: Annotated[str, "JSON criteria: a list of OR-groups, each a list of filter objects"] = "[]",
    case_sensitive: Annotated[bool, "Compare strings case-sensitively"] = False,
) -> str:
    """Search records supplied inline without touching the session.

    REQUIRES AUTHENTICATION: You must provide a valid auth_token obtained from get_auth_token().
    """
    if not validate_auth_token(auth_token):
        return auth_error()

    records = json.loads(data)
    result = search_manager.search_from_json(records, criteria, SearchOptions(case_sensitive=case_sensitive))
    return json.dumps(search_manager.format_response(result), indent=2, default=str)


# Registered without decorating so the module-level names stay plain callables
for _tool in (
    get_auth_token,
    get_operators,
    load_dataset,
    get_criteria,
    add_criteria_list,
    add_criteria,
    remove_criteria,
    update_criteria,
    clear_criteria,
    search_dataset,
    search_records,
):
    mcp.tool()(_tool)


def main() -> None:
    """Entry point for the MCP server."""
    logging.basicConfig(level=logging.INFO)
    mcp.run()


if __name__ == "__main__":
    main()
