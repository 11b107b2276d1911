# MIT License
# Copyright (c) 2025 Hashborn

"""
Prometheus Metrics Exporter

Exports ledger metrics in Prometheus format.

Metrics:
- Committed block height and block count
- Transactions applied and rejected (by reason)
- Working block fill level
- Fees burned, account count
"""

from prometheus_client import Counter, Gauge, CollectorRegistry, generate_latest

# Create registry for metrics
metrics_registry = CollectorRegistry()

# ═══════════════════════════════════════════════════════════════════
# CHAIN METRICS
# ═══════════════════════════════════════════════════════════════════

block_height = Gauge(
    'ledgerchain_block_height',
    'Number of the last committed block',
    registry=metrics_registry
)

blocks_committed_total = Counter(
    'ledgerchain_blocks_committed_total',
    'Total number of blocks sealed and committed',
    registry=metrics_registry
)

working_block_size = Gauge(
    'ledgerchain_working_block_size',
    'Transactions waiting in the working block',
    registry=metrics_registry
)

# ═══════════════════════════════════════════════════════════════════
# TRANSACTION METRICS
# ═══════════════════════════════════════════════════════════════════

transactions_total = Counter(
    'ledgerchain_transactions_total',
    'Total number of transactions applied',
    registry=metrics_registry
)

transactions_rejected_total = Counter(
    'ledgerchain_transactions_rejected_total',
    'Transactions rejected by the processor',
    ['reason'],
    registry=metrics_registry
)

# ═══════════════════════════════════════════════════════════════════
# ECONOMIC METRICS
# ═══════════════════════════════════════════════════════════════════

fees_burned_total = Counter(
    'ledgerchain_fees_burned_total',
    'Fees removed from circulation by applied transactions',
    registry=metrics_registry
)

accounts_total = Gauge(
    'ledgerchain_accounts_total',
    'Accounts tracked by the working block',
    registry=metrics_registry
)


def record_transaction(tx):
    """Counts an applied transaction and its burned fee."""
    transactions_total.inc()
    fees_burned_total.inc(tx.fee)


def record_rejection(reason: str):
    transactions_rejected_total.labels(reason=reason).inc()


def record_commit(block):
    blocks_committed_total.inc()
    block_height.set(block.number)


def update_metrics(ledger):
    """
    Refresh gauges from ledger state.
    Called after commits and when metrics are scraped.

    Args:
        ledger: Ledger instance
    """
    with ledger.lock:
        block_height.set(ledger.height)
        working_block_size.set(ledger.working_block.size)
        accounts_total.set(len(ledger.working_block.accounts))


def export_metrics(ledger=None) -> bytes:
    """Prometheus text exposition of the ledger registry."""
    if ledger is not None:
        update_metrics(ledger)
    return generate_latest(metrics_registry)
