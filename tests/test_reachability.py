"""
Unit Tests for DomainReachabilityChecker

MX first, optional A fallback, resolver failures degrade to unreachable.
"""

import pytest
from unittest.mock import Mock

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from validates_email.dns_service import DNSServiceBase, MockDNSService
from validates_email.reachability import DomainReachabilityChecker, Reachability, ReachabilityPolicy

MX_ONLY = ReachabilityPolicy(try_mx=True, fallback_to_a=False)
MX_THEN_A = ReachabilityPolicy(try_mx=True, fallback_to_a=True)


class TestDomainReachabilityChecker:
    """Policy sequencing against a mocked DNS service."""

    def setup_method(self):
        self.dns = MockDNSService(
            mx_responses={'gmail.com': True},
            a_responses={'gmail.com': True, 'example.com': True}
        )
        self.checker = DomainReachabilityChecker(self.dns)

    def test_mx_record_is_reachable(self):
        assert self.checker.check('gmail.com', MX_ONLY) is Reachability.REACHABLE
        assert self.dns.call_history == [('get_mx_records', 'gmail.com')]

    def test_no_mx_without_fallback_is_unreachable(self):
        assert self.checker.check('example.com', MX_ONLY) is Reachability.UNREACHABLE
        assert self.dns.call_history == [('get_mx_records', 'example.com')]

    def test_fallback_to_a_record(self):
        assert self.checker.check('example.com', MX_THEN_A) is Reachability.REACHABLE
        assert self.dns.call_history == [
            ('get_mx_records', 'example.com'),
            ('get_a_records', 'example.com'),
        ]

    def test_mx_found_skips_a_lookup(self):
        self.checker.check('gmail.com', MX_THEN_A)
        assert ('get_a_records', 'gmail.com') not in self.dns.call_history

    def test_no_records_at_all(self):
        assert self.checker.check('exampledoesnotexist.com', MX_THEN_A) is Reachability.UNREACHABLE

    def test_default_policy_is_mx_only(self):
        assert self.checker.check('example.com') is Reachability.UNREACHABLE

    def test_nothing_to_try(self):
        policy = ReachabilityPolicy(try_mx=False, fallback_to_a=False)
        assert self.checker.check('gmail.com', policy) is Reachability.UNREACHABLE
        assert self.dns.call_count == 0

    def test_is_reachable(self):
        assert self.checker.is_reachable('gmail.com') is True
        assert self.checker.is_reachable('example.com') is False


class TestResolverFailures:
    """A failing resolver never crashes the check."""

    def test_mx_error_falls_back_to_a(self):
        dns = Mock(spec=DNSServiceBase)
        dns.get_mx_records.side_effect = OSError('network unreachable')
        dns.get_a_records.return_value = ['192.0.2.1']

        checker = DomainReachabilityChecker(dns)
        assert checker.check('example.com', MX_THEN_A) is Reachability.REACHABLE

    @pytest.mark.parametrize("policy", [MX_ONLY, MX_THEN_A])
    def test_errors_are_unreachable(self, policy):
        dns = Mock(spec=DNSServiceBase)
        dns.get_mx_records.side_effect = RuntimeError('boom')
        dns.get_a_records.side_effect = TimeoutError()

        checker = DomainReachabilityChecker(dns)
        assert checker.check('example.com', policy) is Reachability.UNREACHABLE
        assert dns.get_mx_records.call_count == 1

    def test_no_retry(self):
        dns = Mock(spec=DNSServiceBase)
        dns.get_mx_records.return_value = []
        dns.get_a_records.return_value = []

        DomainReachabilityChecker(dns).check('example.com', MX_THEN_A)
        assert dns.get_mx_records.call_count == 1
        assert dns.get_a_records.call_count == 1
