#!/usr/bin/env python3
"""
Performance Benchmark for validates_email

Measures validations per second for the grammar check, with and without a
(mocked) MX lookup.
"""

import os
import sys
import time

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from validates_email import EmailValidator, MockDNSService, ValidationConfig

VALID_EMAILS = [
    "valid@example.com",
    "valid-valid+1.23@test.example.com.au",
    "customer/department=shipping@example.com",
    "test'test@example.com",
    '"Fred\\ Bloggs"@example.com',
]

INVALID_EMAILS = [
    "invalidexample.com",
    ".invalid@example.com",
    "invalid@example.com.",
    "Fred\\ Bloggs_@example.com",
    "чебурашка@kremlin.ru",
]

PATHOLOGICAL_EMAILS = [
    '"' + '\\a' * 200 + '"@example.com',
    "a" * 5000 + "@example.com",
    "a@" + "b." * 2000 + "com",
]

ALL_EMAILS = VALID_EMAILS + INVALID_EMAILS


def benchmark(validator, emails, iterations=10000):
    """Run benchmark and return statistics."""
    start_time = time.perf_counter()

    for _ in range(iterations):
        for email in emails:
            validator.validate(email)

    total_time = time.perf_counter() - start_time
    total_requests = iterations * len(emails)

    return {
        'total_time': total_time,
        'total_requests': total_requests,
        'rps': total_requests / total_time,
        'avg_time_ms': (total_time / total_requests) * 1000
    }


def report(title, result):
    print(f"\n[{title}]")
    print(f"  Total time: {result['total_time']:.3f}s")
    print(f"  Total requests: {result['total_requests']}")
    print(f"  RPS: {result['rps']:,.0f} requests/second")
    print(f"  Avg time: {result['avg_time_ms']:.4f}ms")


def main():
    print("=" * 60)
    print("validates_email Performance Benchmark")
    print("=" * 60)

    validator = EmailValidator()
    mx_validator = EmailValidator(
        ValidationConfig(use_mx_with_fallback_to_a=True),
        dns_service=MockDNSService(mx_responses={'example.com': True})
    )

    benchmark(validator, ALL_EMAILS, iterations=1000)

    report("Valid emails", benchmark(validator, VALID_EMAILS))
    report("Invalid emails", benchmark(validator, INVALID_EMAILS))
    report("Pathological emails", benchmark(validator, PATHOLOGICAL_EMAILS, iterations=1000))
    report("Mixed emails with mocked MX lookup", benchmark(mx_validator, ALL_EMAILS))

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
