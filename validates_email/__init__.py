"""
validates_email Package

Provides email validation with grammar checking and optional DNS MX / A
record verification.
"""

from .config import ConfigurationError, ValidationConfig
from .dns_service import DNSService, DNSServiceBase, MockDNSService
from .grammar import GrammarRecognizer, ParsedAddress, recognize
from .model import EmailAttributeValidator, ValidatesEmail
from .reachability import DomainReachabilityChecker, Reachability, ReachabilityPolicy
from .validator import EmailValidator, FailureReason, ValidationResult

__all__ = [
    'ConfigurationError',
    'DNSService',
    'DNSServiceBase',
    'DomainReachabilityChecker',
    'EmailAttributeValidator',
    'EmailValidator',
    'FailureReason',
    'GrammarRecognizer',
    'MockDNSService',
    'ParsedAddress',
    'Reachability',
    'ReachabilityPolicy',
    'ValidatesEmail',
    'ValidationConfig',
    'ValidationResult',
    'recognize',
]
__version__ = '1.0.0'
