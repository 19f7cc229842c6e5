"""
Reachability Module

Decides whether a domain can plausibly receive mail, based on its MX records
and optionally on its A records.
"""

import logging
from enum import Enum
from typing import NamedTuple

from .dns_service import DNSServiceBase

logger = logging.getLogger(__name__)


class Reachability(Enum):
    REACHABLE = 'reachable'
    UNREACHABLE = 'unreachable'


class ReachabilityPolicy(NamedTuple):
    """Which record types to consult, MX always before A."""
    try_mx: bool = True
    fallback_to_a: bool = False


class DomainReachabilityChecker:
    """
    Checks MX records, then A records when the policy allows the fallback.

    At most one query per record type is made per call. Resolver errors are
    treated as "no records": a failing lookup makes the domain unreachable but
    never propagates to the caller.
    """

    def __init__(self, dns_service: DNSServiceBase):
        self.dns_service = dns_service

    def check(self, domain: str, policy: ReachabilityPolicy = ReachabilityPolicy()) -> Reachability:
        """
        Check whether ``domain`` has usable mail-exchange or address records.

        Args:
            domain: The domain to check
            policy: Record types to consult

        Returns:
            Reachability.REACHABLE or Reachability.UNREACHABLE
        """
        if policy.try_mx and self._lookup(self.dns_service.get_mx_records, domain, 'MX'):
            return Reachability.REACHABLE

        if policy.fallback_to_a and self._lookup(self.dns_service.get_a_records, domain, 'A'):
            logger.debug("%s has no MX record, accepted on its A record", domain)
            return Reachability.REACHABLE

        return Reachability.UNREACHABLE

    def is_reachable(self, domain: str, policy: ReachabilityPolicy = ReachabilityPolicy()) -> bool:
        return self.check(domain, policy) is Reachability.REACHABLE

    @staticmethod
    def _lookup(lookup, domain: str, record_type: str) -> bool:
        try:
            return len(lookup(domain)) > 0
        except Exception as e:
            logger.warning("%s lookup for %s raised %s: %s", record_type, domain, type(e).__name__, e)
            return False
