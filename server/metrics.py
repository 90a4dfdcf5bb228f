"""
Prometheus Metrics Module

Provides instrumentation for the election service:
- Ballot casting and rejections
- Authentication outcomes
- Chat traffic
- API requests and errors

Usage:
    from server.metrics import metrics
    metrics.ballots_cast.inc()
    metrics.ballots_rejected.labels(reason="DuplicateVote").inc()
"""

from prometheus_client import Counter, Histogram, Gauge, generate_latest, REGISTRY


class SecureVoteMetrics:
    """Centralized metrics for the SecureVote API"""

    def __init__(self):
        # Ballot metrics
        self.ballots_cast = Counter(
            'securevote_ballots_cast_total',
            'Total ballots accepted by the ledger'
        )

        self.ballots_rejected = Counter(
            'securevote_ballots_rejected_total',
            'Ballots refused by the ledger',
            ['reason']  # ElectionNotFound/ElectionClosed/InvalidCandidate/DuplicateVote
        )

        self.cast_duration = Histogram(
            'securevote_cast_duration_seconds',
            'Time to validate and append one ballot',
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0]
        )

        self.live_elections = Gauge(
            'securevote_live_elections',
            'Elections currently open for voting'
        )

        # Auth metrics
        self.logins = Counter(
            'securevote_logins_total',
            'Login attempts',
            ['status']  # success/failure
        )

        self.registrations = Counter(
            'securevote_registrations_total',
            'New accounts created'
        )

        # Chat metrics
        self.chat_messages = Counter(
            'securevote_chat_messages_total',
            'Chat messages answered'
        )

        # API metrics
        self.api_requests = Counter(
            'securevote_api_requests_total',
            'Total API requests',
            ['endpoint', 'method', 'status_code']
        )

        self.api_request_duration = Histogram(
            'securevote_api_request_duration_seconds',
            'API request duration',
            ['endpoint', 'method'],
            buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0]
        )

        # Error metrics
        self.errors = Counter(
            'securevote_errors_total',
            'Total errors by component and type',
            ['component', 'error_type']
        )

    def record_error(self, component: str, error: Exception):
        """Record an error

        Args:
            component: Component name (ledger/database/api)
            error: Exception instance
        """
        error_type = type(error).__name__
        self.errors.labels(component=component, error_type=error_type).inc()


# Global metrics instance
metrics = SecureVoteMetrics()


def get_metrics_text() -> str:
    """Get Prometheus metrics in text format

    Returns:
        Metrics text suitable for /metrics endpoint
    """
    return generate_latest(REGISTRY).decode('utf-8')
