"""Calls placed or received by an account, with their recordings and feedback."""

from __future__ import annotations

from restnav.resources import InstanceResource, ListResource, Subresource


class Calls(ListResource):
    pass


class Call(InstanceResource):
    recordings = Subresource()
    feedback = Subresource()


class Recordings(ListResource):
    pass


class Recording(InstanceResource):
    pass


class Feedback(ListResource):
    pass


class FeedbackInstance(InstanceResource):
    pass
