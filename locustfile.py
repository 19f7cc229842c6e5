"""
Locust Load Testing File for the validates_email API

Run with:
    locust -f locustfile.py --host=http://localhost:5000

Then open http://localhost:8089 in your browser to control the test.
"""

import logging
import random

from locust import HttpUser, task, between, events

logger = logging.getLogger(__name__)

VALID_EMAILS = [
    "valid@example.com",
    "Valid@test.example.com",
    "valid+valid123@test.example.com",
    "valid-valid+1.23@test.example.com.au",
    "valid@example.w-dash.sch.uk",
    "customer/department=shipping@example.com",
    "$A12345@example.com",
    "!def!xyz%abc@example.com",
    "test'test@example.com",
    '"Abc\\@def"@example.com',
    '"Fred\\ Bloggs"@example.com',
]

INVALID_EMAILS = [
    "invalid@example-com",
    ".invalid@example.com",
    "invalid.@example.com",
    "invali..d@example.com",
    "invalid@ex_mple.com",
    "invalid@example.com.",
    "invalid@example.com-",
    "invalid@example.c",
    "invali d@example.com",
    "invalidexample.com",
    "invalid++email@example.com",
    "Fred\\ Bloggs_@example.com",
    "чебурашка@kremlin.ru",
]

MIXED_EMAILS = VALID_EMAILS + INVALID_EMAILS


class EmailValidatorUser(HttpUser):
    """Simulates a typical client of the API."""

    wait_time = between(0.5, 2)

    @task(10)
    def validate_valid_email(self):
        self.client.post(
            "/validate",
            json={"email": random.choice(VALID_EMAILS)},
            name="/validate [valid]"
        )

    @task(3)
    def validate_invalid_email(self):
        self.client.post(
            "/validate",
            json={"email": random.choice(INVALID_EMAILS)},
            name="/validate [invalid]"
        )

    @task(5)
    def quick_check(self):
        self.client.get(
            "/quick-check",
            params={"email": random.choice(VALID_EMAILS)},
            name="/quick-check"
        )

    @task(1)
    def validate_batch(self):
        emails = random.sample(MIXED_EMAILS, random.randint(5, 10))
        self.client.post("/validate/batch", json={"emails": emails}, name="/validate/batch")

    @task(1)
    def health_check(self):
        self.client.get("/health", name="/health")


class BatchValidatorUser(HttpUser):
    """Sends large batches; lower frequency, heavier load per request."""

    wait_time = between(2, 5)

    @task
    def batch_validate(self):
        emails = [random.choice(MIXED_EMAILS) for _ in range(random.randint(10, 50))]
        self.client.post("/validate/batch", json={"emails": emails})


@events.request.add_listener
def on_request(request_type, name, response_time, response_length, exception, **kwargs):
    """Log failed and slow requests."""
    if exception:
        logger.warning("Request failed: %s - %s", name, exception)
    elif response_time > 1000:
        logger.warning("Slow request: %s took %.2fms", name, response_time)


@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    stats = environment.stats.total
    logger.info(
        "Requests: %s, failures: %s, median: %.2fms, p95: %.2fms",
        stats.num_requests,
        stats.num_failures,
        stats.median_response_time,
        stats.get_response_time_percentile(0.95)
    )
