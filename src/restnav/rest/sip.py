"""SIP domains and the access control lists attached to them."""

from __future__ import annotations

from restnav.resources import InstanceResource, ListResource, Subresource


class Sip(ListResource):
    domains = Subresource()
    ip_access_control_lists = Subresource()
    credential_lists = Subresource()


class SipInstance(InstanceResource):
    pass


class Domains(ListResource):
    pass


class Domain(InstanceResource):
    ip_access_control_list_mappings = Subresource()
    credential_list_mappings = Subresource()


class IpAccessControlListMappings(ListResource):
    pass


class IpAccessControlListMapping(InstanceResource):
    pass


class CredentialListMappings(ListResource):
    pass


class CredentialListMapping(InstanceResource):
    pass


class IpAccessControlLists(ListResource):
    pass


class IpAccessControlList(InstanceResource):
    ip_addresses = Subresource()


class IpAddresses(ListResource):
    pass


class IpAddress(InstanceResource):
    pass


class CredentialLists(ListResource):
    pass


class CredentialList(InstanceResource):
    credentials = Subresource()


class Credentials(ListResource):
    pass


class Credential(InstanceResource):
    pass
