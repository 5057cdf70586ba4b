from prometheus_client import Counter, Histogram, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        # If it already exists, retrieve it from the registry
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "todo_requests_total",
    "Total requests",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "todo_request_latency_seconds",
    "Request latency",
    Histogram,
    labelnames=["endpoint"],
)

LLM_CALLS_TOTAL = get_or_create_metric(
    "todo_llm_calls_total",
    "Remote model calls by outcome",
    Counter,
    labelnames=["outcome"],
)

RANKING_PARSE_FAILURES_TOTAL = get_or_create_metric(
    "todo_ranking_parse_failures_total", "Model responses that could not be parsed", Counter
)

TODOS_PRIORITIZED_TOTAL = get_or_create_metric(
    "todo_todos_prioritized_total", "Total todos returned by prioritization", Counter
)
