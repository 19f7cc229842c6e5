"""
Email Validator Module

Contains the EmailValidator class, which runs the grammar check and then,
when configured and active, the domain reachability check.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .config import ValidationConfig
from .dns_service import DNSService, DNSServiceBase
from .grammar import GrammarRecognizer
from .reachability import DomainReachabilityChecker, Reachability, ReachabilityPolicy

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = 'is invalid'
DEFAULT_MX_MESSAGE = 'has no mail server'


class FailureReason(Enum):
    SYNTAX_INVALID = 'syntax_invalid'
    DOMAIN_UNREACHABLE = 'domain_unreachable'


@dataclass
class ValidationResult:
    """
    Represents the result of an email validation.

    Attributes:
        is_valid: Whether the email is valid
        email: The email address that was validated
        failure_reason: Why validation failed (None if valid)
        message: The configured error message for the failure (None if valid)
        errors: Details of what was wrong
        domain_checked: Whether DNS records were consulted
    """
    is_valid: bool
    email: Any
    failure_reason: Optional[FailureReason] = None
    message: Optional[str] = None
    errors: List[str] = field(default_factory=list)
    domain_checked: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary format."""
        return {
            'is_valid': self.is_valid,
            'email': self.email,
            'failure_reason': self.failure_reason.value if self.failure_reason else None,
            'message': self.message,
            'errors': self.errors,
            'domain_checked': self.domain_checked
        }


class EmailValidator:
    """
    Validates email syntax and optionally the domain's MX (or A) records.

    Syntax failures short-circuit: DNS is never queried for a malformed
    address. Results are never cached; each call queries DNS afresh.

    Example:
        >>> validator = EmailValidator()
        >>> validator.validate('user@example.com').is_valid
        True
    """

    def __init__(self, config: Optional[ValidationConfig] = None,
                 dns_service: Optional[DNSServiceBase] = None,
                 recognizer: Optional[GrammarRecognizer] = None):
        """
        Initialize the EmailValidator.

        Args:
            config: Validation options; defaults to syntax checking only
            dns_service: DNS service used when the DNS check is active;
                defaults to a DNSService when a DNS policy is configured
            recognizer: Grammar recognizer to use
        """
        self.config = config or ValidationConfig()
        if dns_service is None and self.config.dns_requested:
            dns_service = DNSService()
        self.dns_service = dns_service
        self.recognizer = recognizer or GrammarRecognizer()

    @property
    def policy(self) -> ReachabilityPolicy:
        return ReachabilityPolicy(
            try_mx=self.config.dns_requested,
            fallback_to_a=self.config.use_mx_with_fallback_to_a
        )

    def validate(self, email, context: Any = None) -> ValidationResult:
        """
        Validate an email address.

        Args:
            email: The email address to validate
            context: Passed to a dynamic activation predicate, typically the
                object that owns the address

        Returns:
            ValidationResult object with validation details
        """
        parsed, reason = self.recognizer.parse(email)
        if parsed is None:
            return ValidationResult(
                is_valid=False,
                email=email,
                failure_reason=FailureReason.SYNTAX_INVALID,
                message=self.config.message or DEFAULT_MESSAGE,
                errors=[reason]
            )

        if not self.config.dns_active(context):
            return ValidationResult(is_valid=True, email=email)

        checker = DomainReachabilityChecker(self.dns_service)
        if checker.check(parsed.domain, self.policy) is Reachability.REACHABLE:
            return ValidationResult(is_valid=True, email=email, domain_checked=True)

        logger.info("No mail records found for %s", parsed.domain)
        return ValidationResult(
            is_valid=False,
            email=email,
            failure_reason=FailureReason.DOMAIN_UNREACHABLE,
            message=self.config.mx_message or DEFAULT_MX_MESSAGE,
            errors=[f"No usable mail records found for {parsed.domain}"],
            domain_checked=True
        )

    def validate_batch(self, emails: list, context: Any = None) -> List[ValidationResult]:
        """
        Validate multiple email addresses.

        Args:
            emails: List of email addresses to validate
            context: Passed to a dynamic activation predicate

        Returns:
            List of ValidationResult objects
        """
        return [self.validate(email, context) for email in emails]

    def is_valid(self, email, context: Any = None) -> bool:
        """Quick check if email is valid."""
        return self.validate(email, context).is_valid
