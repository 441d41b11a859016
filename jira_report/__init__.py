"""Daily JIRA report and slash command server for Slack."""
