"""Base Pydantic model for oidcrp.

Every configuration, schema and result model in the package inherits from
:class:`OidcrpBaseModel` so that behaviour is consistent:

- Strict field validation (no extra fields allowed)
- Immutable instances, safe to share between concurrent logins

Example:
    >>> from oidcrp.models import OidcrpBaseModel
    >>>
    >>> class Endpoint(OidcrpBaseModel):
    ...     url: str
    >>>
    >>> Endpoint(url="https://idp.example.com/token").model_dump()
    {'url': 'https://idp.example.com/token'}
"""

from pydantic import BaseModel, ConfigDict


class OidcrpBaseModel(BaseModel):
    """Base model for all oidcrp Pydantic models.

    - extra="forbid": Rejects any fields not defined in the model
    - frozen=True: Makes instances immutable

    Models describing remote payloads override ``extra`` to ``"ignore"``
    because identity providers routinely add fields.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)
