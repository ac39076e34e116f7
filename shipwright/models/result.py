"""Task and deployment result models"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from ..exceptions import DeploymentError


class TaskOutcome(Enum):
    """Outcome of one task run"""
    SUCCESS = "success"
    FAILURE = "failure"
    SKIPPED = "skipped"
    FATAL = "fatal"


@dataclass
class TaskReport:
    """Report of a task run"""

    task_name: str
    stage: str
    outcome: TaskOutcome
    host: Optional[str] = None
    message: str = ""
    in_rollback: bool = False
    duration: float = 0.0


@dataclass
class DeploymentResult:
    """Result of a deployment or rollback run"""

    environment: str
    release_id: str
    operation: str = "deploy"
    reports: List[TaskReport] = field(default_factory=list)
    failed_hosts: List[str] = field(default_factory=list)
    aborted: bool = False
    error: Optional[str] = None
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    @property
    def success(self) -> bool:
        return not self.aborted and not self.failed_hosts and self.error is None

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def add_report(self, report: TaskReport) -> None:
        self.reports.append(report)

    def mark_host_failed(self, host: str) -> None:
        if host not in self.failed_hosts:
            self.failed_hosts.append(host)

    def abort(self, message: str) -> None:
        """Mark the run as aborted by a fatal error"""
        self.aborted = True
        self.error = message

    def fail(self, message: str) -> None:
        """Mark the run as failed without a fatal error"""
        if self.error is None:
            self.error = message

    def complete(self) -> None:
        self.end_time = datetime.now()

    def count(self, outcome: TaskOutcome) -> int:
        return sum(1 for r in self.reports if r.outcome == outcome)

    def raise_for_status(self) -> None:
        """Raise DeploymentError if the run did not succeed"""
        if not self.success:
            raise DeploymentError(
                self.error or f"{self.operation.capitalize()} to {self.environment} failed"
            )
