"""
DNS Service Module

Provides the DNS lookups used to decide whether a domain can receive mail.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

import dns.exception
import dns.resolver

logger = logging.getLogger(__name__)


class DNSServiceBase(ABC):
    """Abstract base class for DNS services."""

    @abstractmethod
    def get_mx_records(self, domain: str) -> List[Tuple[int, str]]:
        """
        Get all MX records for a domain.

        Args:
            domain: The domain to check

        Returns:
            List of (priority, server) tuples, empty if none were found
        """

    @abstractmethod
    def get_a_records(self, domain: str) -> List[str]:
        """
        Get all A records for a domain.

        Args:
            domain: The domain to check

        Returns:
            List of IPv4 addresses, empty if none were found
        """

    def check_mx_record(self, domain: str) -> bool:
        """Check if at least one MX record exists for a domain."""
        return len(self.get_mx_records(domain)) > 0

    def check_a_record(self, domain: str) -> bool:
        """Check if at least one A record exists for a domain."""
        return len(self.get_a_records(domain)) > 0


class DNSService(DNSServiceBase):
    """
    Real DNS service that performs actual DNS lookups with dnspython.

    Every lookup is a single query bounded by ``timeout``; lookup failures
    (NXDOMAIN, no answer, timeout, server failure) return an empty list.
    """

    def __init__(self, timeout: float = 5, nameservers: Optional[Sequence[str]] = None):
        """
        Initialize the DNS service.

        Args:
            timeout: DNS query timeout in seconds
            nameservers: Optional nameserver IPs; the system resolver
                configuration is used when omitted
        """
        self.timeout = timeout
        self._resolver = dns.resolver.Resolver(configure=not nameservers)
        self._resolver.timeout = timeout
        self._resolver.lifetime = timeout
        if nameservers:
            self._resolver.nameservers = list(nameservers)
            logger.info("Using custom DNS servers: %s", nameservers)

    def get_mx_records(self, domain: str) -> List[Tuple[int, str]]:
        answers = self._resolve(domain, 'MX')
        records = [(rdata.preference, str(rdata.exchange)) for rdata in answers]
        return sorted(records, key=lambda x: x[0])

    def get_a_records(self, domain: str) -> List[str]:
        return [rdata.address for rdata in self._resolve(domain, 'A')]

    def _resolve(self, domain: str, record_type: str) -> list:
        try:
            return list(self._resolver.resolve(domain, record_type))
        except dns.resolver.NXDOMAIN:
            logger.debug("%s lookup for %s: domain does not exist", record_type, domain)
        except dns.resolver.NoAnswer:
            logger.debug("%s lookup for %s: no records", record_type, domain)
        except dns.exception.Timeout:
            logger.warning("%s lookup for %s timed out after %ss", record_type, domain, self.timeout)
        except dns.exception.DNSException as e:
            logger.warning("%s lookup for %s failed: %s", record_type, domain, e)
        return []


class MockDNSService(DNSServiceBase):
    """
    Mock DNS service for testing purposes.

    Allows configuring predefined MX and A answers for specific domains.
    """

    def __init__(self, mx_responses: Optional[Dict[str, list]] = None,
                 a_responses: Optional[Dict[str, list]] = None):
        """
        Initialize the mock DNS service.

        Args:
            mx_responses: Domain to MX answer mapping; a value may be a list
                of (priority, server) tuples or a bool, e.g.
                {'gmail.com': True, 'invalid.fake': False}
            a_responses: Domain to A answer mapping; a value may be a list
                of addresses or a bool
        """
        self.mx_responses = dict(mx_responses or {})
        self.a_responses = dict(a_responses or {})
        self.call_history = []

    def set_response(self, domain: str, has_mx: bool = False, has_a: bool = False):
        """
        Set the response for a specific domain.

        Args:
            domain: The domain to configure
            has_mx: Whether the domain has an MX record
            has_a: Whether the domain has an A record
        """
        self.mx_responses[domain] = has_mx
        self.a_responses[domain] = has_a

    def get_mx_records(self, domain: str) -> List[Tuple[int, str]]:
        self.call_history.append(('get_mx_records', domain))
        response = self.mx_responses.get(domain, False)
        if response is True:
            return [(10, f'mail.{domain}')]
        return sorted(response or [], key=lambda x: x[0])

    def get_a_records(self, domain: str) -> List[str]:
        self.call_history.append(('get_a_records', domain))
        response = self.a_responses.get(domain, False)
        if response is True:
            return ['192.0.2.1']
        return list(response or [])

    @property
    def call_count(self) -> int:
        return len(self.call_history)

    def reset_history(self):
        """Reset the call history."""
        self.call_history = []
