"""Time-clock package.

Organized by feature modules (ledger, punches, users, reports, ...) with a thin
Flask controller layer over service/repository layers. The ``ledger`` package
holds the pure attendance engine and has no I/O dependencies.
"""
