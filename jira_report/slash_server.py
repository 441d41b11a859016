"""Slack slash command server that reports JIRA issues for one person.

Supported forms of the command:

    /issues                  your own open issues (name looked up in Slack)
    /issues John Doe         John Doe's open issues
    /issues --all            all of your issues, including closed ones
    /issues John Doe --all   all of John Doe's issues; flag position does not matter

Slack requires an answer within three seconds, so the endpoint acknowledges
immediately and the JIRA lookup runs as a background task that reports back
through the command's response_url.
"""
from __future__ import annotations

import hashlib
import hmac
import time
from urllib.parse import parse_qs

import requests
import uvicorn
from fastapi import BackgroundTasks, FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse
from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError

from jira_report.digest import (
    EPHEMERAL_SUMMARY_CHARS,
    HTTP_ERROR_THRESHOLD,
    HTTP_TIMEOUT,
    MAX_BLOCKS,
    REPORT_STATUSES,
    SLACK_USERS_INFO_URL,
    UMBRELLA_TYPE,
    Block,
    ConfigurationError,
    FilterConfig,
    IssueItem,
    JiraIssue,
    SlackAPIError,
    SlackRequestError,
    Settings,
    divider,
    ensure_dict,
    ensure_str,
    escape_slack_text,
    fetch_jira_issues,
    filter_config_from_settings,
    format_pr_links,
    group_issues_by_status,
    header,
    is_excluded,
    issue_link,
    jira_fields_from_settings,
    parse_issue_nodes,
    section,
    send_response_url,
    slack_headers,
    to_item,
    truncate_summary,
)

ALL_FLAG = "--all"
ACK_TEXT = "🔍 Fetching your JIRA issues..."
NAME_LOOKUP_FAILED_TEXT = (
    "Failed to auto-detect your name.\n\nPlease specify a name: `/issues John Doe`"
)
SIGNATURE_VERSION = "v0"
MAX_REQUEST_AGE_SECONDS = 60 * 5


class SlashCommand(BaseModel):
    """Form fields Slack sends to a slash command endpoint."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    token: str = ""
    team_id: str = ""
    team_domain: str = ""
    channel_id: str = ""
    channel_name: str = ""
    user_id: str
    user_name: str = ""
    command: str = ""
    text: str = ""
    response_url: str


class ParsedCommand(BaseModel):
    """Target name and flags parsed from the command text."""

    model_config = ConfigDict(frozen=True)

    username: str | None
    include_all: bool


def parse_command_text(text: str) -> ParsedCommand:
    """Split the command text into an optional name and the --all flag."""
    include_all = ALL_FLAG in text
    username = " ".join(text.replace(ALL_FLAG, " ").split())
    return ParsedCommand(username=username or None, include_all=include_all)


def verify_slack_signature(
    signing_secret: str,
    body: bytes,
    timestamp: str,
    signature: str,
    now: float | None = None,
) -> bool:
    """Check a request against Slack's v0 signing scheme."""
    try:
        request_time = int(timestamp)
    except ValueError:
        return False
    # Stale timestamps are rejected to prevent replays.
    if abs((now or time.time()) - request_time) > MAX_REQUEST_AGE_SECONDS:
        return False
    base = f"{SIGNATURE_VERSION}:{timestamp}:".encode() + body
    expected = f"{SIGNATURE_VERSION}=" + hmac.new(
        signing_secret.encode("utf-8"),
        base,
        hashlib.sha256,
    ).hexdigest()
    return hmac.compare_digest(expected, signature)


def get_slack_user_real_name(bot_token: str, user_id: str) -> str:
    """Look up the name a Slack user is known by."""
    response = requests.get(
        SLACK_USERS_INFO_URL,
        headers=slack_headers(bot_token),
        params={"user": user_id},
        timeout=HTTP_TIMEOUT,
    )
    if response.status_code >= HTTP_ERROR_THRESHOLD:
        raise SlackRequestError(response.status_code, response.text)
    body = ensure_dict(response.json(), "users.info response")
    if not body.get("ok"):
        raise SlackAPIError(body.get("error"))
    user = ensure_dict(body.get("user") or {}, "user")
    profile = ensure_dict(user.get("profile") or {}, "user.profile")
    candidates = (
        profile.get("display_name"),
        user.get("real_name"),
        profile.get("real_name"),
        user.get("name"),
    )
    for candidate in candidates:
        name = ensure_str(candidate, "user name")
        if name:
            return name
    raise SlackAPIError("user has no name")


def build_jql_query(project: str, *, include_all: bool) -> str:
    """Build the JQL for a slash command.

    Users are matched on display names afterwards, so the query only scopes
    the project and, unless --all is given, the open statuses.
    """
    if include_all:
        return f"project = {project} ORDER BY status ASC, updated DESC"
    statuses = ", ".join(REPORT_STATUSES)
    return (
        f"project = {project} AND (status IN ({statuses}) "
        f"OR (type = {UMBRELLA_TYPE} AND status != Closed)) ORDER BY status ASC"
    )


def filter_issues_by_user(
    issues: list[JiraIssue],
    username: str,
    config: FilterConfig,
    *,
    skip_filters: bool,
) -> list[IssueItem]:
    """Return issues whose assignee or QA contact contains the name.

    Matching is a case-insensitive substring test, so a short query can match
    several people.
    """
    needle = username.lower()
    matched: list[IssueItem] = []
    for issue in issues:
        if not skip_filters and is_excluded(issue, config):
            continue
        names = (issue.assignee or "", issue.qa_contact or "")
        if any(needle in name.lower() for name in names):
            matched.append(to_item(issue))
    return matched


def ephemeral_item_block(jira_url: str, item: IssueItem) -> Block:
    """Render one issue line of the slash command reply."""
    summary = truncate_summary(item.summary, EPHEMERAL_SUMMARY_CHARS)
    return section(
        f"• {issue_link(jira_url, item.key)} — {summary}\n"
        f"   *Status:* {escape_slack_text(item.status)}  |  *PR:* {format_pr_links(item.pull_requests)}",
    )


def build_ephemeral_status_blocks(
    jira_url: str,
    username: str,
    status_groups: dict[str, list[IssueItem]],
    *,
    include_all: bool,
    max_blocks: int = MAX_BLOCKS,
) -> list[Block]:
    """Build a single message of issues organized by status.

    Content that does not fit under max_blocks is dropped and replaced by a
    marker saying how many issues were not shown.
    """
    total = sum(len(items) for items in status_groups.values())
    summary_lines = [
        f"• *{escape_slack_text(status)}:* {len(items)}" for status, items in status_groups.items()
    ]
    title = f"🔍 All Issues for {username}" if include_all else f"🔍 Issues for {username}"
    blocks: list[Block] = [
        header(title),
        section(
            f"Found *{total}* issue(s) across *{len(status_groups)}* status(es)\n\n"
            "📊 *Summary:*\n" + "\n".join(summary_lines),
        ),
        divider(),
    ]
    shown = 0
    for status, items in status_groups.items():
        # status header + one issue + the truncation marker
        if len(blocks) + 3 > max_blocks:
            blocks.append(section(f"_...and {total - shown} more issue(s) not shown_"))
            return blocks
        blocks.append(section(f"\n📂 *{escape_slack_text(status)}* ({len(items)})"))
        for index, item in enumerate(items):
            if len(blocks) + 2 > max_blocks:
                blocks.append(
                    section(
                        f"_...and {len(items) - index} more in this status "
                        f"({total - shown} total remaining)_",
                    ),
                )
                return blocks
            blocks.append(ephemeral_item_block(jira_url, item))
            shown += 1
    return blocks


def send_error_response(response_url: str, message: str) -> None:
    """Send an ephemeral error message to the caller."""
    try:
        send_response_url(
            response_url,
            {"response_type": "ephemeral", "text": f"❌ {message}"},
        )
    except (requests.RequestException, SlackRequestError):
        logger.exception("Failed to send error response")


def resolve_username(settings: Settings, command: SlashCommand, parsed: ParsedCommand) -> str | None:
    """Return the requested name, falling back to the caller's Slack name."""
    if parsed.username:
        return parsed.username
    try:
        username = get_slack_user_real_name(settings.slack_bot_token or "", command.user_id)
    except (requests.RequestException, RuntimeError) as exc:
        logger.warning("User lookup failed for {user_id}: {error}", user_id=command.user_id, error=exc)
        return None
    logger.info(
        "Auto-detected user: {username} (Slack: @{user_name}, ID: {user_id})",
        username=username,
        user_name=command.user_name,
        user_id=command.user_id,
    )
    return username


def run_slash_command(settings: Settings, command: SlashCommand) -> None:
    """Fetch the caller's issues and post them to the response_url."""
    parsed = parse_command_text(command.text)
    username = resolve_username(settings, command, parsed)
    if username is None:
        send_error_response(command.response_url, NAME_LOOKUP_FAILED_TEXT)
        return

    jql = build_jql_query(settings.jira_project, include_all=parsed.include_all)
    logger.info(
        "Fetching issues for {username} (all={include_all}): {jql}",
        username=username,
        include_all=parsed.include_all,
        jql=jql,
    )
    fields = jira_fields_from_settings(settings)
    nodes = fetch_jira_issues(
        settings.jira_url,
        settings.jira_token,
        jql,
        fields=fields.search_fields(),
        page_size=settings.jira_page_size,
    )
    items = filter_issues_by_user(
        parse_issue_nodes(nodes, fields),
        username,
        filter_config_from_settings(settings),
        skip_filters=not settings.slash_apply_report_filters,
    )
    logger.info("Found {count} issues for {username}", count=len(items), username=username)
    if not items:
        send_error_response(
            command.response_url,
            f"No issues found for: *{escape_slack_text(username)}*\n\n"
            "Make sure the name matches exactly as it appears in JIRA.",
        )
        return

    blocks = build_ephemeral_status_blocks(
        settings.jira_url,
        username,
        group_issues_by_status(items),
        include_all=parsed.include_all,
    )
    send_response_url(command.response_url, {"response_type": "ephemeral", "blocks": blocks})
    logger.info(
        "Sent {count} issues for {username} to @{user_name}",
        count=len(items),
        username=username,
        user_name=command.user_name,
    )


def process_slash_command(settings: Settings, command: SlashCommand) -> None:
    """Run one slash command in the background and report failures to the caller."""
    try:
        run_slash_command(settings, command)
    except (requests.RequestException, RuntimeError, ValueError) as exc:
        logger.exception("Slash command failed for @{user_name}", user_name=command.user_name)
        send_error_response(command.response_url, f"Failed to fetch JIRA issues: {exc}")


def create_app(settings: Settings) -> FastAPI:
    """Create the slash command application."""
    app = FastAPI(title="JIRA issues slash command")

    @app.get("/health", response_class=PlainTextResponse)
    def health() -> str:
        """Report that the server is up."""
        return "OK"

    @app.post("/slack/issues")
    async def issues_command(request: Request, background_tasks: BackgroundTasks) -> dict[str, str]:
        """Acknowledge the command and process it in the background."""
        body = await request.body()
        if settings.slack_signing_secret and not verify_slack_signature(
            settings.slack_signing_secret,
            body,
            request.headers.get("X-Slack-Request-Timestamp", ""),
            request.headers.get("X-Slack-Signature", ""),
        ):
            raise HTTPException(status_code=401, detail="Invalid request signature")
        try:
            form = {
                key: values[0]
                for key, values in parse_qs(body.decode("utf-8"), keep_blank_values=True).items()
            }
            command = SlashCommand.model_validate(form)
        except (UnicodeDecodeError, ValidationError) as exc:
            raise HTTPException(status_code=400, detail="Failed to parse form") from exc
        logger.info(
            "Received command from @{user_name}: {command} {text}",
            user_name=command.user_name,
            command=command.command,
            text=command.text,
        )
        background_tasks.add_task(process_slash_command, settings, command)
        return {"response_type": "ephemeral", "text": ACK_TEXT}

    return app


def serve(settings: Settings) -> None:
    """Run the slash command server until interrupted."""
    if not settings.slack_bot_token:
        raise ConfigurationError("Missing SLACK_BOT_TOKEN, required by the slash command server.")
    if not settings.slack_signing_secret:
        logger.warning("SLACK_SIGNING_SECRET not set. Request verification disabled.")
    logger.info("Slash command server starting on port {port}", port=settings.port)
    logger.info("Endpoint: http://localhost:{port}/slack/issues", port=settings.port)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)  # noqa: S104
