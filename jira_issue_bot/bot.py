"""Wiring of the bot: poll pipelines and their schedule."""

import logging
from types import TracebackType

import httpx

from . import __version__
from .config import BotConfig
from .jira_client.client import JiraClient
from .jira_client.models import Issue
from .jira_client.session import SessionManager
from .publishing.formatters import IssueLinks
from .publishing.publisher import Publisher
from .report.aggregator import ReportBuckets, build_report
from .scheduler import PeriodicJob, Scheduler, log_error
from .slack.client import ChatUser, SlackChatClient
from .storage.cache import IssueCache

logger = logging.getLogger(__name__)


class IssueBot:
    """Holds the process-wide state (session, issue cache) and runs the polls.

    Use as an async context manager so the HTTP client gets closed.
    """

    def __init__(
        self,
        config: BotConfig,
        http: httpx.AsyncClient | None = None,
        chat: SlackChatClient | None = None,
    ):
        """Initialize the bot.

        Args:
            config: Bot configuration
            http: HTTP client for Jira. Created from the config if None.
            chat: Chat client. Created from the config if None.
        """
        self.config = config
        self.http = http or httpx.AsyncClient(
            verify=config.jira.verify_ssl,
            timeout=httpx.Timeout(config.jira.timeout_seconds),
            headers={"User-Agent": f"jira-issue-bot/{__version__}"},
        )
        self.session_manager = SessionManager(config.jira, self.http)
        self.jira = JiraClient(config.jira, self.session_manager, self.http)
        self.cache = IssueCache()
        self.chat = chat or SlackChatClient(config.slack)
        self.publisher = Publisher(
            self.chat,
            conversation_id=config.slack.channel or "",
            links=IssueLinks(
                internal_domain=config.jira.internal_domain,
                public_domain=config.jira.domain,
            ),
        )

    async def __aenter__(self) -> "IssueBot":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.http.aclose()

    async def logon_chat(self) -> ChatUser:
        """Log on to the chat platform."""
        return await self.chat.logon()

    async def logon_jira(self) -> None:
        """Log in to Jira."""
        await self.session_manager.login()

    async def fetch_new_issues(self) -> list[Issue]:
        """Run the issues poll and return issues not seen before."""
        raw_issues = await self.jira.search(self.config.issues_poll.query)
        issues = self.cache.filter_new(raw_issues)
        logger.info(
            f"Fetched {len(raw_issues)} Jira issues, {len(issues)} of them are new."
        )
        return issues

    async def run_issue_poll(self) -> None:
        """Fetch new issues and post one message per issue."""
        issues = await self.fetch_new_issues()
        await self.publisher.publish_new_issues(issues)

    async def fetch_report(self) -> ReportBuckets:
        """Run the report poll and build the digest buckets."""
        raw_issues = await self.jira.search(self.config.report_poll.query)
        logger.info(f"Fetched {len(raw_issues)} Jira issues for report.")
        return build_report(raw_issues)

    async def run_daily_report(self) -> None:
        """Fetch, aggregate and post the digest."""
        buckets = await self.fetch_report()
        await self.publisher.publish_report(buckets, self.config.report_poll.name)

    def build_scheduler(self) -> Scheduler:
        """Create the scheduler for this bot.

        A failing issues poll terminates the process so that a supervisor
        restarts it. A failing periodic report is only logged. The first
        report runs immediately and is part of startup, so its failure is
        fatal as well.
        """
        scheduler = Scheduler(
            startup=[self.logon_chat, self.logon_jira],
            initial=[self.run_daily_report],
            on_ready=lambda: logger.info("Done. Press Ctrl-C to exit"),
        )
        scheduler.add_job(
            PeriodicJob(
                self.config.issues_poll.name,
                self.config.issues_poll.interval_seconds,
                self.run_issue_poll,
                on_error=scheduler.terminate,
            )
        )
        scheduler.add_job(
            PeriodicJob(
                self.config.report_poll.name,
                self.config.report_poll.interval_seconds,
                self.run_daily_report,
                on_error=log_error(self.config.report_poll.name),
            )
        )
        return scheduler

    async def run(self) -> None:
        """Run the bot until a fatal error.

        Raises:
            FatalError: On an unrecoverable error
        """
        await self.build_scheduler().run()
