from prometheus_client import Counter, Histogram, Gauge, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        # If it already exists, retrieve it from the registry
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "taskflow_requests_total",
    "Total API requests",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "taskflow_request_latency_seconds",
    "Request latency",
    Histogram,
    labelnames=["endpoint"],
)

INTAKE_TOTAL = get_or_create_metric(
    "taskflow_intake_total",
    "Natural-language intake attempts by outcome",
    Counter,
    labelnames=["outcome"],
)

EXTRACTION_FAILURES_TOTAL = get_or_create_metric(
    "taskflow_extraction_failures_total",
    "Extraction service failures by kind",
    Counter,
    labelnames=["kind"],
)

TASKS_CREATED_TOTAL = get_or_create_metric(
    "taskflow_tasks_created_total",
    "Tasks created",
    Counter,
    labelnames=["source"],
)

TASKS_BY_STATUS = get_or_create_metric(
    "taskflow_tasks",
    "Stored tasks by status (refreshed on scrape)",
    Gauge,
    labelnames=["status"],
)
