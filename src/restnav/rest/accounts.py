"""Accounts and the resources owned directly by an account."""

from __future__ import annotations

from restnav.resources import InstanceResource, ListResource, Subresource
from restnav.rest.calls import Calls
from restnav.rest.messages import Messages
from restnav.rest.sip import Sip
from restnav.rest.sms import Sms


class Accounts(ListResource):
    pass


class Account(InstanceResource):
    calls = Subresource(Calls)
    messages = Subresource(Messages)
    sms = Subresource(Sms)
    sip = Subresource(Sip)
    incoming_phone_numbers = Subresource()
    recordings = Subresource()


class IncomingPhoneNumbers(ListResource):
    pass


class IncomingPhoneNumber(InstanceResource):
    pass


class Recordings(ListResource):
    pass


class Recording(InstanceResource):
    pass
