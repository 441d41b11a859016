#!/usr/bin/env python3
"""Generate a daily JIRA report grouped by person and post it to Slack."""
from __future__ import annotations

import argparse
import json
import sys
import time
from collections import defaultdict
from datetime import datetime
from typing import cast

import requests
from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

SLACK_POST_MESSAGE_URL = "https://slack.com/api/chat.postMessage"
SLACK_USERS_INFO_URL = "https://slack.com/api/users.info"
SEARCH_PATH = "/rest/api/2/search"
DEFAULT_PROJECT = "MTV"
DEFAULT_PAGE_SIZE = 100
DEFAULT_QA_CONTACT_FIELD = "customfield_12315948"
DEFAULT_PR_FIELD = "customfield_12310220"
DEFAULT_EXCLUDED_COMPONENTS = "User Interface"
DEFAULT_EXCLUDED_LABELS = "user-interface,mtv-storage-offload,mtv-copy-offload"
UNASSIGNED = "Unassigned"
UMBRELLA_TYPE = "Epic"
REVIEW_STATUSES = ("ON_QA", "MODIFIED")
REPORT_STATUSES = ("POST", "ON_QA", "MODIFIED")
STATUS_ORDER = (
    "Open",
    "In Progress",
    "Modified",
    "Closed",
    "Archived",
    "POST",
    "ON_QA",
    "MODIFIED",
    "Verified",
    "Done",
)
# Slack rejects messages above 50 blocks.
MAX_BLOCKS = 48
REPORT_SUMMARY_CHARS = 200
EPHEMERAL_SUMMARY_CHARS = 100
NO_PR = "–"
NO_ISSUES_TEXT = "_No issues to report today._"
HTTP_OK = 200
HTTP_REDIRECT_THRESHOLD = 300
HTTP_ERROR_THRESHOLD = 400
HTTP_TIMEOUT = 30
JSONDict = dict[str, object]
JSONList = list[object]
Block = dict[str, object]
PersonGroups = dict[str, dict[str, list["IssueItem"]]]


def ensure_dict(value: object, context: str) -> JSONDict:
    """Return a dictionary value or raise."""
    if isinstance(value, dict):
        return cast("JSONDict", value)
    raise ResponseDecodeError(context, "object")


def ensure_list(value: object, context: str) -> JSONList:
    """Return a list value or raise."""
    if isinstance(value, list):
        return cast("JSONList", value)
    raise ResponseDecodeError(context, "list")


def ensure_str(value: object, context: str, default: str = "") -> str:
    """Return a string value or a default."""
    if isinstance(value, str):
        return value
    if value is None:
        return default
    raise ResponseDecodeError(context, "string")


def ensure_int(value: object, context: str) -> int:
    """Return an integer value or raise."""
    if isinstance(value, int):
        return value
    raise ResponseDecodeError(context, "integer")


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing."""


class JiraRequestError(RuntimeError):
    """Raised when the JIRA search API rejects a request."""

    def __init__(self, status_code: int, text: str) -> None:
        """Create a JIRA request error."""
        super().__init__(f"JIRA API returned {status_code}: {text}")


class ResponseDecodeError(RuntimeError):
    """Raised when a response body does not have the expected shape."""

    def __init__(self, context: str, expected: str) -> None:
        """Create a decode error for a field."""
        super().__init__(f"Unexpected response shape: {context} is not a {expected}")


class SlackRequestError(RuntimeError):
    """Raised when a Slack HTTP call fails."""

    def __init__(self, status_code: int, text: str) -> None:
        """Create a Slack request error."""
        super().__init__(f"Slack request failed ({status_code}): {text}")


class SlackAPIError(RuntimeError):
    """Raised when the Slack Web API answers with ok=false."""

    def __init__(self, error: object) -> None:
        """Create a Slack API error."""
        super().__init__(f"Slack API error: {error}")


class Settings(BaseSettings):
    """Environment-backed settings for the report and the slash command server."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    jira_url: str = Field(alias="JIRA_URL")
    jira_token: str = Field(alias="JIRA_TOKEN")
    jira_project: str = Field(default=DEFAULT_PROJECT, alias="JIRA_PROJECT")
    jira_page_size: int = Field(default=DEFAULT_PAGE_SIZE, alias="JIRA_PAGE_SIZE")
    jira_qa_contact_field: str = Field(
        default=DEFAULT_QA_CONTACT_FIELD,
        alias="JIRA_QA_CONTACT_FIELD",
    )
    jira_pr_field: str = Field(default=DEFAULT_PR_FIELD, alias="JIRA_PR_FIELD")

    slack_bot_token: str | None = Field(default=None, alias="SLACK_BOT_TOKEN")
    slack_channel: str | None = Field(default=None, alias="SLACK_CHANNEL")
    slack_webhook_url: str | None = Field(default=None, alias="SLACK_WEBHOOK_URL")
    slack_signing_secret: str | None = Field(default=None, alias="SLACK_SIGNING_SECRET")
    slack_reply_delay_seconds: float = Field(
        default=0.5,
        alias="SLACK_REPLY_DELAY_SECONDS",
    )
    port: int = Field(default=8080, alias="PORT")

    report_excluded_components: str = Field(
        default=DEFAULT_EXCLUDED_COMPONENTS,
        alias="REPORT_EXCLUDED_COMPONENTS",
    )
    report_excluded_labels: str = Field(
        default=DEFAULT_EXCLUDED_LABELS,
        alias="REPORT_EXCLUDED_LABELS",
    )
    slash_apply_report_filters: bool = Field(
        default=False,
        alias="SLASH_APPLY_REPORT_FILTERS",
    )


def get_settings() -> Settings:
    """Load settings from environment variables."""
    return Settings()  # type: ignore[call-arg]


def parse_csv(value: str) -> tuple[str, ...]:
    """Split a comma separated setting into its non-empty entries."""
    return tuple(part.strip() for part in value.split(",") if part.strip())


class JiraFields(BaseModel):
    """Custom field ids used by the JIRA instance."""

    model_config = ConfigDict(frozen=True)

    qa_contact: str = DEFAULT_QA_CONTACT_FIELD
    pull_requests: str = DEFAULT_PR_FIELD

    def search_fields(self) -> list[str]:
        """Return the field list requested from the search API."""
        return [
            "summary",
            "status",
            "assignee",
            self.qa_contact,
            "issuetype",
            "components",
            "labels",
            self.pull_requests,
        ]


class FilterConfig(BaseModel):
    """Inclusion and grouping rules applied to fetched issues."""

    model_config = ConfigDict(frozen=True)

    excluded_components: frozenset[str] = frozenset()
    excluded_labels: frozenset[str] = frozenset()
    umbrella_type: str = UMBRELLA_TYPE
    review_statuses: frozenset[str] = frozenset(REVIEW_STATUSES)


def jira_fields_from_settings(settings: Settings) -> JiraFields:
    """Build the custom field mapping from settings."""
    return JiraFields(
        qa_contact=settings.jira_qa_contact_field,
        pull_requests=settings.jira_pr_field,
    )


def filter_config_from_settings(settings: Settings) -> FilterConfig:
    """Build the filter configuration from settings."""
    return FilterConfig(
        excluded_components=frozenset(parse_csv(settings.report_excluded_components)),
        excluded_labels=frozenset(parse_csv(settings.report_excluded_labels)),
    )


class JiraIssue(BaseModel):
    """A JIRA issue decoded from the search API."""

    model_config = ConfigDict(frozen=True)

    key: str
    summary: str
    status: str
    issue_type: str
    assignee: str | None = None
    qa_contact: str | None = None
    components: list[str] = []
    labels: list[str] = []
    pull_requests: list[str] = []


class IssueItem(BaseModel):
    """Simplified issue used for grouping and display."""

    model_config = ConfigDict(frozen=True)

    key: str
    summary: str
    status: str
    pull_requests: list[str] = []


def log_elapsed(message: str, start: float, **fields: object) -> None:
    """Log elapsed time with additional fields."""
    elapsed = f"{time.perf_counter() - start:.2f}s"
    logger.info(
        "{message} (elapsed {elapsed})",
        message=message,
        elapsed=elapsed,
        **fields,
    )


def jira_headers(jira_token: str) -> dict[str, str]:
    """Return JIRA API headers with authentication."""
    return {
        "Authorization": f"Bearer {jira_token}",
        "Content-Type": "application/json",
    }


def slack_headers(bot_token: str) -> dict[str, str]:
    """Return Slack Web API headers with authentication."""
    return {
        "Authorization": f"Bearer {bot_token}",
        "Content-Type": "application/json; charset=utf-8",
    }


def fetch_jira_issues(
    jira_url: str,
    jira_token: str,
    jql: str,
    *,
    fields: list[str],
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[JSONDict]:
    """Fetch every issue matching a JQL query, one page at a time."""
    all_issues: list[JSONDict] = []
    start_at = 0
    while True:
        response = requests.post(
            f"{jira_url.rstrip('/')}{SEARCH_PATH}",
            headers=jira_headers(jira_token),
            json={
                "jql": jql,
                "startAt": start_at,
                "maxResults": page_size,
                "fields": fields,
            },
            timeout=HTTP_TIMEOUT,
        )
        if response.status_code != HTTP_OK:
            raise JiraRequestError(response.status_code, response.text)
        try:
            payload = ensure_dict(response.json(), "search response")
        except ValueError as exc:
            raise ResponseDecodeError("search response", "JSON document") from exc
        total = ensure_int(payload.get("total"), "total")
        issues = ensure_list(payload.get("issues") or [], "issues")
        all_issues.extend(ensure_dict(issue, "issue") for issue in issues)
        fetched = start_at + len(issues)
        if fetched >= total or not issues:
            logger.info("Fetched all {total} issues from JIRA", total=total)
            break
        logger.info(
            "Fetched {fetched}/{total} issues, continuing",
            fetched=fetched,
            total=total,
        )
        start_at += page_size
    return all_issues


def extract_prs(value: object) -> list[str]:
    """Normalize the pull request field, which is a string, a list, or absent."""
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str) and item]
    return []


def extract_display_name(value: object, context: str) -> str | None:
    """Return the displayName of a user field, or None when unset."""
    if value is None:
        return None
    user = ensure_dict(value, context)
    return ensure_str(user.get("displayName"), f"{context}.displayName") or None


def extract_names(value: object, context: str) -> list[str]:
    """Extract the name of each entry in a list of named objects."""
    names: list[str] = []
    for entry in ensure_list(value or [], context):
        name = ensure_str(ensure_dict(entry, context).get("name"), f"{context}.name")
        if name:
            names.append(name)
    return names


def parse_issue_node(node: JSONDict, fields: JiraFields) -> JiraIssue:
    """Parse a JiraIssue from a search API issue node."""
    raw = ensure_dict(node.get("fields"), "fields")
    status = ensure_dict(raw.get("status") or {}, "fields.status")
    issue_type = ensure_dict(raw.get("issuetype") or {}, "fields.issuetype")
    labels = ensure_list(raw.get("labels") or [], "fields.labels")
    return JiraIssue(
        key=ensure_str(node.get("key"), "key"),
        summary=ensure_str(raw.get("summary"), "fields.summary"),
        status=ensure_str(status.get("name"), "status.name"),
        issue_type=ensure_str(issue_type.get("name"), "issuetype.name"),
        assignee=extract_display_name(raw.get("assignee"), "fields.assignee"),
        qa_contact=extract_display_name(raw.get(fields.qa_contact), fields.qa_contact),
        components=extract_names(raw.get("components"), "fields.components"),
        labels=[label for label in labels if isinstance(label, str)],
        pull_requests=extract_prs(raw.get(fields.pull_requests)),
    )


def parse_issue_nodes(nodes: list[JSONDict], fields: JiraFields) -> list[JiraIssue]:
    """Parse every node returned by the search API."""
    return [parse_issue_node(node, fields) for node in nodes]


def to_item(issue: JiraIssue) -> IssueItem:
    """Return the display view of an issue."""
    return IssueItem(
        key=issue.key,
        summary=issue.summary,
        status=issue.status,
        pull_requests=list(issue.pull_requests),
    )


def should_filter_out(issue: JiraIssue, config: FilterConfig) -> bool:
    """Return True when a component or label is on an exclusion list."""
    if any(component in config.excluded_components for component in issue.components):
        return True
    return any(label in config.excluded_labels for label in issue.labels)


def is_excluded(issue: JiraIssue, config: FilterConfig) -> bool:
    """Apply the daily report rules, including umbrella issues without PRs."""
    if should_filter_out(issue, config):
        return True
    return issue.issue_type == config.umbrella_type and not issue.pull_requests


def responsible_person(issue: JiraIssue, config: FilterConfig) -> str:
    """Return the person an issue is reported under."""
    if issue.status in config.review_statuses and issue.qa_contact:
        return issue.qa_contact
    return issue.assignee or UNASSIGNED


def order_statuses(statuses: list[str]) -> list[str]:
    """Order statuses by STATUS_ORDER, then by first appearance."""
    known = [status for status in STATUS_ORDER if status in statuses]
    extra = [status for status in statuses if status not in STATUS_ORDER]
    return known + extra


def group_issues_by_status(items: list[IssueItem]) -> dict[str, list[IssueItem]]:
    """Group items by their literal status string."""
    groups: dict[str, list[IssueItem]] = defaultdict(list)
    for item in items:
        groups[item.status].append(item)
    return {status: groups[status] for status in order_statuses(list(groups))}


def group_issues_by_person(
    issues: list[JiraIssue],
    config: FilterConfig,
) -> PersonGroups:
    """Filter issues and group them by responsible person, then by status."""
    by_person: dict[str, list[IssueItem]] = defaultdict(list)
    for issue in issues:
        if is_excluded(issue, config):
            continue
        by_person[responsible_person(issue, config)].append(to_item(issue))
    return {
        person: group_issues_by_status(by_person[person])
        for person in sorted(by_person)
    }


def escape_slack_text(text: str) -> str:
    """Escape characters with special meaning in Slack mrkdwn."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def truncate_summary(summary: str, limit: int) -> str:
    """Truncate a raw summary to the character budget, then escape it."""
    if len(summary) > limit:
        summary = summary[:limit] + "..."
    return escape_slack_text(summary)


def format_pr_links(pull_requests: list[str]) -> str:
    """Render PR urls as numbered Slack links."""
    if not pull_requests:
        return NO_PR
    return " ".join(
        f"<{url}|PR{index}>" for index, url in enumerate(pull_requests, start=1)
    )


def issue_link(jira_url: str, key: str) -> str:
    """Return a Slack link to the issue page."""
    return f"<{jira_url.rstrip('/')}/browse/{key}|*{key}*>"


def section(text: str) -> Block:
    """Return a mrkdwn section block."""
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


def divider() -> Block:
    """Return a divider block."""
    return {"type": "divider"}


def header(text: str) -> Block:
    """Return a plain text header block."""
    return {"type": "header", "text": {"type": "plain_text", "text": text}}


def report_item_block(jira_url: str, item: IssueItem) -> Block:
    """Render one issue line of the daily report."""
    summary = truncate_summary(item.summary, REPORT_SUMMARY_CHARS)
    return section(
        f"{issue_link(jira_url, item.key)} — {summary}\n"
        f"Status: *{escape_slack_text(item.status)}* | PR: {format_pr_links(item.pull_requests)}",
    )


def person_header(person: str, *, continued: bool = False) -> Block:
    """Render the heading block for a person."""
    text = f"*👤 {escape_slack_text(person)}*"
    if continued:
        text += " (continued)"
    return section(text)


def status_header(status: str, *, continued: bool = False) -> Block:
    """Render the heading block for a status group."""
    text = f"📂 *{escape_slack_text(status)}*"
    if continued:
        text += " (continued)"
    return section(text)


def build_report_pages(
    jira_url: str,
    groups: PersonGroups,
    *,
    max_blocks: int = MAX_BLOCKS,
    status_headers: bool = False,
) -> list[list[Block]]:
    """Pack grouped issues into pages of at most max_blocks blocks.

    Every person opens with a header and closes with a divider. A header is
    only placed when at least one item and the closing divider fit after it;
    otherwise the page is closed first. When a person's items overflow, the
    page is closed with a divider and the next page repeats the header with
    a "(continued)" marker. Pages are never back-filled.
    """
    header_blocks = 2 if status_headers else 1
    pages: list[list[Block]] = []
    current: list[Block] = []

    def close_page() -> None:
        nonlocal current
        if current:
            pages.append(current)
        current = []

    for person, statuses in groups.items():
        # header(s) + one item + divider
        if len(current) + header_blocks + 2 > max_blocks:
            close_page()
        current.append(person_header(person))
        for status, items in statuses.items():
            if status_headers:
                if len(current) + 3 > max_blocks:
                    current.append(divider())
                    close_page()
                    current.append(person_header(person, continued=True))
                current.append(status_header(status))
            for item in items:
                # item + closing divider
                if len(current) + 2 > max_blocks:
                    current.append(divider())
                    close_page()
                    current.append(person_header(person, continued=True))
                    if status_headers:
                        current.append(status_header(status, continued=True))
                current.append(report_item_block(jira_url, item))
        current.append(divider())
    close_page()
    return pages


def count_items(groups: PersonGroups) -> int:
    """Count the issues across all groups."""
    return sum(len(items) for statuses in groups.values() for items in statuses.values())


def report_title_blocks(now: datetime | None = None) -> list[Block]:
    """Return the title blocks that open the report thread."""
    now = now or datetime.now()
    return [header(f"🧾 Daily JIRA Summary — {now:%b} {now.day}, {now.year}"), divider()]


def build_report_jql(project: str) -> str:
    """Build the JQL query used by the daily report."""
    statuses = ", ".join(REPORT_STATUSES)
    return (
        f"project = {project} AND (status IN ({statuses}) "
        f"OR (type = {UMBRELLA_TYPE} AND status != Closed)) ORDER BY assignee"
    )


def post_to_slack_api(
    bot_token: str,
    channel: str,
    blocks: list[Block],
    thread_ts: str | None = None,
) -> str:
    """Post a message with chat.postMessage and return its timestamp."""
    payload: JSONDict = {
        "channel": channel,
        "blocks": blocks,
        "unfurl_links": False,
        "unfurl_media": False,
    }
    if thread_ts:
        payload["thread_ts"] = thread_ts
    response = requests.post(
        SLACK_POST_MESSAGE_URL,
        headers=slack_headers(bot_token),
        json=payload,
        timeout=HTTP_TIMEOUT,
    )
    if response.status_code >= HTTP_ERROR_THRESHOLD:
        raise SlackRequestError(response.status_code, response.text)
    body = ensure_dict(response.json(), "chat.postMessage response")
    if not body.get("ok"):
        raise SlackAPIError(body.get("error"))
    return ensure_str(body.get("ts"), "chat.postMessage ts")


def send_threaded_report(
    bot_token: str,
    channel: str,
    title_blocks: list[Block],
    pages: list[list[Block]],
    *,
    delay: float,
) -> str:
    """Create a thread from the title and post every page as a reply, in order."""
    logger.info("Creating thread with header")
    thread_ts = post_to_slack_api(bot_token, channel, title_blocks)
    total = len(pages)
    for index, blocks in enumerate(pages, start=1):
        logger.info(
            "Sending reply {index}/{total} with {count} blocks",
            index=index,
            total=total,
            count=len(blocks),
        )
        post_to_slack_api(bot_token, channel, blocks, thread_ts=thread_ts)
        # Slack does not guarantee ordering of rapid posts into one thread.
        if index < total:
            time.sleep(delay)
    return thread_ts


def post_to_webhook(webhook_url: str, blocks: list[Block], text: str = "") -> None:
    """Post a block payload to an incoming webhook."""
    response = requests.post(
        webhook_url,
        json={"text": text, "blocks": blocks},
        timeout=HTTP_TIMEOUT,
    )
    if response.status_code >= HTTP_ERROR_THRESHOLD:
        raise SlackRequestError(response.status_code, response.text)


def send_webhook_report(
    webhook_url: str,
    title_blocks: list[Block],
    pages: list[list[Block]],
    *,
    delay: float,
) -> None:
    """Post the title and each page through an incoming webhook."""
    post_to_webhook(webhook_url, title_blocks, text="Daily JIRA Summary")
    for index, blocks in enumerate(pages, start=1):
        post_to_webhook(webhook_url, blocks)
        if index < len(pages):
            time.sleep(delay)


def send_response_url(response_url: str, payload: JSONDict) -> None:
    """Post a delayed slash command response to its response_url."""
    response = requests.post(response_url, json=payload, timeout=HTTP_TIMEOUT)
    if response.status_code >= HTTP_REDIRECT_THRESHOLD:
        raise SlackRequestError(response.status_code, response.text)


def validate_report_settings(settings: Settings) -> None:
    """Ensure a Slack destination is configured for the batch report."""
    if settings.slack_bot_token and settings.slack_channel:
        return
    if settings.slack_webhook_url:
        return
    raise ConfigurationError(
        "Missing Slack destination. Set SLACK_BOT_TOKEN and SLACK_CHANNEL, "
        "or SLACK_WEBHOOK_URL.",
    )


def collect_report_groups(settings: Settings) -> tuple[int, PersonGroups]:
    """Fetch, decode, filter and group the issues for the daily report."""
    fields = jira_fields_from_settings(settings)
    jql = build_report_jql(settings.jira_project)
    logger.info("JQL: {jql}", jql=jql)
    start = time.perf_counter()
    nodes = fetch_jira_issues(
        settings.jira_url,
        settings.jira_token,
        jql,
        fields=fields.search_fields(),
        page_size=settings.jira_page_size,
    )
    log_elapsed("Fetched JIRA issues", start, count=len(nodes))
    issues = parse_issue_nodes(nodes, fields)
    groups = group_issues_by_person(issues, filter_config_from_settings(settings))
    return len(issues), groups


def run_daily_report(settings: Settings, *, dry_run: bool = False) -> None:
    """Execute the daily report workflow."""
    fetched, groups = collect_report_groups(settings)
    pages = build_report_pages(settings.jira_url, groups)
    if not pages:
        logger.info("No issues matched the report filters")
        pages = [[section(NO_ISSUES_TEXT)]]
    stats = {
        "fetched": fetched,
        "reported": count_items(groups),
        "people": len(groups),
        "pages": len(pages),
    }
    logger.info("Report stats: {stats}", stats=json.dumps(stats, indent=2))
    title_blocks = report_title_blocks()
    if dry_run:
        logger.info("--- DRY RUN OUTPUT ---")
        logger.opt(raw=True).info(
            "{message}\n",
            message=json.dumps([title_blocks, *pages], indent=2, ensure_ascii=False),
        )
        return
    if settings.slack_bot_token and settings.slack_channel:
        send_threaded_report(
            settings.slack_bot_token,
            settings.slack_channel,
            title_blocks,
            pages,
            delay=settings.slack_reply_delay_seconds,
        )
    else:
        send_webhook_report(
            cast("str", settings.slack_webhook_url),
            title_blocks,
            pages,
            delay=settings.slack_reply_delay_seconds,
        )
    logger.info(
        "Sent report with {replies} thread replies containing {count} issues",
        replies=len(pages),
        count=stats["reported"],
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(description="JIRA Daily Report")
    parser.add_argument(
        "--server",
        action="store_true",
        help="Run the slash command server instead of the daily report",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the report instead of posting to Slack",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the report CLI."""
    args = parse_args(argv)
    try:
        settings = get_settings()
    except ValidationError as exc:
        logger.error("Missing required configuration: {error}", error=exc)
        return 1
    if args.server:
        from jira_report.slash_server import serve

        try:
            serve(settings)
        except ConfigurationError as exc:
            logger.error("{error}", error=exc)
            return 1
        return 0
    logger.info("Starting daily report run")
    try:
        if not args.dry_run:
            validate_report_settings(settings)
        run_daily_report(settings, dry_run=args.dry_run)
    except (requests.RequestException, RuntimeError) as exc:
        logger.error("Daily report failed: {error}", error=exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
