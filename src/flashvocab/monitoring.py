"""Monitoring configuration for the trainer."""
from prometheus_client import Counter, start_http_server

# Vocabulary metrics
words_added = Counter(
    "flashvocab_words_added_total",
    "Total number of words added to the vocabulary",
)

words_deleted = Counter(
    "flashvocab_words_deleted_total",
    "Total number of words deleted from the vocabulary",
)

words_learned = Counter(
    "flashvocab_words_learned_total",
    "Total number of words marked as learned",
)

# Training metrics
answers = Counter(
    "flashvocab_answers_total",
    "Total number of answers given during review",
    ["result"],
)

training_sessions = Counter(
    "flashvocab_training_sessions_total",
    "Total number of training sessions started",
    ["mode"],
)

# Storage metrics
storage_errors = Counter(
    "flashvocab_storage_errors_total",
    "Total number of persisted records that could not be parsed",
    ["record"],
)


def start_monitoring(port: int = 9090) -> None:
    """Start the Prometheus metrics server."""
    start_http_server(port)
