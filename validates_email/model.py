"""
Model Module

Attribute-level email validation for plain Python objects.

Example:
    >>> class Person(ValidatesEmail):
    ...     email_validators = [EmailAttributeValidator('primary_email')]
    ...     def __init__(self, primary_email=None):
    ...         self.primary_email = primary_email
    >>> person = Person(primary_email='example.com')
    >>> person.valid()
    False
    >>> person.errors
    {'primary_email': ['is invalid']}
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from .config import Activation, ValidationConfig
from .dns_service import DNSServiceBase
from .validator import EmailValidator, ValidationResult


class EmailAttributeValidator:
    """
    Validates one email attribute of a record and records the error message.

    ``activation`` may additionally be the name of a boolean attribute on the
    record (e.g. 'with_mx_validation'); it is read on every validation.
    """

    def __init__(self, attribute: str, use_mx: bool = False,
                 use_mx_with_fallback_to_a: bool = False,
                 message: Optional[str] = None,
                 mx_message: Optional[str] = None,
                 activation: Union[Activation, str] = True,
                 dns_service: Optional[DNSServiceBase] = None):
        self.attribute = attribute
        if isinstance(activation, str):
            activation = _attribute_flag(activation)
        self.validator = EmailValidator(
            ValidationConfig(
                use_mx=use_mx,
                use_mx_with_fallback_to_a=use_mx_with_fallback_to_a,
                message=message,
                mx_message=mx_message,
                activation=activation
            ),
            dns_service=dns_service
        )

    def validate(self, record) -> ValidationResult:
        """Validate the attribute on ``record``, adding any error to ``record.errors``."""
        result = self.validator.validate(getattr(record, self.attribute, None), context=record)
        if not result.is_valid:
            record.errors.setdefault(self.attribute, []).append(result.message)
        return result


class ValidatesEmail:
    """Mixin giving a class an ``errors`` dict and a ``valid()`` method."""

    email_validators: Sequence[EmailAttributeValidator] = ()

    @property
    def errors(self) -> Dict[str, List[str]]:
        if '_errors' not in self.__dict__:
            self._errors = {}
        return self._errors

    def valid(self) -> bool:
        """Run every email validator of the class; errors from earlier runs are cleared."""
        self.errors.clear()
        for validator in self.email_validators:
            validator.validate(self)
        return not self.errors


def _attribute_flag(name: str):
    def predicate(record: Any) -> bool:
        return bool(getattr(record, name, False))
    predicate.__name__ = f'flag_{name}'
    return predicate
