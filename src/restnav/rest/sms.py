"""The legacy ``/SMS`` branch.

``Messages`` / ``Message`` here are distinct from the classes of the same
name in :mod:`restnav.rest.messages`; each collection resolves its instance
class inside its own module.
"""

from __future__ import annotations

from restnav.resources import InstanceResource, ListResource, Subresource


class Sms(ListResource):
    messages = Subresource()
    short_codes = Subresource()


class SmsInstance(InstanceResource):
    pass


class Messages(ListResource):
    list_key = "sms_messages"


class Message(InstanceResource):
    pass


class ShortCodes(ListResource):
    pass


class ShortCode(InstanceResource):
    pass
