from prometheus_client import Counter

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status_code"],
)

VALIDATION_ERRORS = Counter(
    "product_validation_errors_total",
    "Total number of product service calls rejected because of invalid input",
    ["operation", "argument"],
)

PRODUCT_WRITES = Counter(
    "product_writes_total",
    "Total number of committed product writes",
    ["operation"],
)
