"""Messages sent or received by an account, and the media attached to them."""

from __future__ import annotations

from restnav.resources import InstanceResource, ListResource, Subresource


class Messages(ListResource):
    pass


class Message(InstanceResource):
    media = Subresource()


class Media(ListResource):
    list_key = "media_list"


class MediaInstance(InstanceResource):
    pass
