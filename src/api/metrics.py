from prometheus_client import Counter, Histogram, Gauge, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        # If it already exists, retrieve it from the registry
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "care_requests_total",
    "Total requests",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "care_request_latency_seconds",
    "Request latency",
    Histogram,
    labelnames=["endpoint"],
)

EXTRACTIONS_TOTAL = get_or_create_metric(
    "care_extractions_total", "Extractions by the path that produced them", Counter,
    labelnames=["path"],
)

REMOTE_FAILURES_TOTAL = get_or_create_metric(
    "care_remote_failures_total", "Remote extraction failures that fell back to local processing",
    Counter, labelnames=["reason"],
)

TASKS_EXTRACTED_TOTAL = get_or_create_metric(
    "care_tasks_extracted_total", "Total tasks extracted from patient input", Counter
)

TASKS_STORED = get_or_create_metric(
    "care_tasks_stored", "Tasks currently in the task store", Gauge
)
