"""Accounting listeners: ledgers, accounts and journal entries."""

from listeners.domain.value_objects import Acknowledge, ListenerSpec, ReadBack, Service
from shared_kernel.messaging.value_objects import Selector

DESTINATION = "accounting-v1"
SELECTOR_HEADER = "action"


def _on(operation: str, confirmation: ReadBack | Acknowledge | None = None) -> ListenerSpec:
    return ListenerSpec(
        destination=DESTINATION,
        selector=Selector(SELECTOR_HEADER, operation),
        operation_key=operation,
        confirmation=confirmation,
    )


def _ledger(summary: str) -> ReadBack:
    return ReadBack(
        service=Service.ACCOUNTING,
        path="/ledgers/{identifier}",
        summary=summary,
        fields={"name": "name"},
    )


def _account(summary: str) -> ReadBack:
    return ReadBack(
        service=Service.ACCOUNTING,
        path="/accounts/{identifier}",
        summary=summary,
        fields={"name": "name", "state": "state"},
    )


def _journal_entry(summary: str) -> ReadBack:
    return ReadBack(
        service=Service.ACCOUNTING,
        path="/journal/{identifier}",
        summary=summary,
        fields={"creditors": "creditors", "debtors": "debtors"},
    )


LISTENERS: tuple[ListenerSpec, ...] = (
    _on("initialize"),
    _on("post-ledger", _ledger("Created ledger account {name}")),
    _on("put-ledger", _ledger("Modified ledger account {name}")),
    _on("delete-ledger", Acknowledge("Deleted ledger account, {identifier}")),
    _on("post-account", _account("Created account {name}")),
    _on("put-account", _account("Modified account {name}")),
    _on("close-account", _account("Account closed: {name} {state}")),
    _on("lock-account", _account("Account locked: {name} {state}")),
    _on("unlock-account", _account("Account unlocked: {name} {state}")),
    _on("reopen-account", _account("Account reopened: {name} {state}")),
    _on("delete-account", Acknowledge("Deleted account, {identifier}")),
    _on(
        "post-journal-entry",
        _journal_entry("Journal entry created ( creditor:{creditors}, debtor:{debtors} )"),
    ),
    _on(
        "release-journal-entry",
        _journal_entry("Journal entry processed ( {creditors} {debtors} )"),
    ),
)
