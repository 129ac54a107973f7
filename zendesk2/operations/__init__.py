"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""Request objects for every supported Zendesk API operation."""

from zendesk2.operations.categories import (
    CreateCategory,
    DestroyCategory,
    GetCategories,
    GetCategory,
    UpdateCategory,
)
from zendesk2.operations.help_center import (
    CreateHelpCenterPost,
    CreateHelpCenterSubscription,
    DestroyHelpCenterPost,
    DestroyHelpCenterSubscription,
    GetHelpCenterPost,
    GetHelpCenterPosts,
    GetHelpCenterSubscription,
    GetHelpCenterUserPosts,
    GetHelpCenterUserSubscriptions,
    UpdateHelpCenterPost,
)
from zendesk2.operations.memberships import (
    CreateMembership,
    DestroyMembership,
    GetMembership,
    GetMemberships,
    GetOrganizationMemberships,
    GetUserMemberships,
)
from zendesk2.operations.organizations import (
    CreateOrganization,
    DestroyOrganization,
    GetOrganization,
    GetOrganizations,
    GetUserOrganizations,
    UpdateOrganization,
)
from zendesk2.operations.tickets import (
    CreateTicket,
    DestroyTicket,
    GetCCDTickets,
    GetOrganizationTickets,
    GetRequestedTickets,
    GetTicket,
    GetTickets,
    UpdateTicket,
)
from zendesk2.operations.user_identities import (
    CreateUserIdentity,
    DestroyUserIdentity,
    GetUserIdentities,
    GetUserIdentity,
    UpdateUserIdentity,
)
from zendesk2.operations.users import (
    CreateUser,
    DestroyUser,
    GetCurrentUser,
    GetOrganizationUsers,
    GetUser,
    GetUsers,
    UpdateUser,
)
