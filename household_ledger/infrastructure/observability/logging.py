"""Structured JSON logging for production observability"""

import logging
import sys
from typing import Any, Dict, List
from pythonjsonlogger import jsonlogger

from household_ledger.config import settings
from household_ledger.domain.models import BudgetUsage, scope_to_str
from household_ledger.utils.date_utils import utcnow


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = utcnow().isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_budget_usage(
    request_id: str,
    user_id: str,
    usages: List[BudgetUsage],
    duration_ms: float,
) -> None:
    """Log one structured record per evaluated budget"""
    for usage in usages:
        logging.info(
            "Budget evaluated",
            extra={
                "request_id": request_id,
                "user_id": user_id,
                "step": "budget_usage",
                "budget_id": usage.budget.id,
                "scope": scope_to_str(usage.budget.scope),
                "period": usage.budget.period.value,
                "window_start": usage.window.start.isoformat(),
                "spent_cents": usage.spent_cents,
                "limit_cents": usage.budget.limit_cents,
                "status": usage.status.value,
                "duration_ms": duration_ms,
            },
        )


def log_record_change(request_id: str, user_id: str, kind: str, operation: str, record_id: str) -> None:
    logging.info(
        f"{kind} {operation}",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "record_change",
            "kind": kind,
            "operation": operation,
            "record_id": record_id,
        },
    )


def log_data_operation(request_id: str, user_id: str, operation: str, counts: Dict[str, int]) -> None:
    """Backup, restore or clear of a user's whole ledger"""
    logging.info(
        f"ledger {operation}",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "data_operation",
            "operation": operation,
            **counts,
        },
    )
