"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

from zendesk2.request import CreateRequest, DestroyRequest, GetRequest, ListRequest, UpdateRequest


class CategoryRequestMixin:
    root = "category"
    collection = "categories"
    collection_path = "/categories"


class CreateCategory(CategoryRequestMixin, CreateRequest):
    accepted_attributes = ("id", "name", "description", "position")


class GetCategory(CategoryRequestMixin, GetRequest):
    pass


class UpdateCategory(CategoryRequestMixin, UpdateRequest):
    accepted_attributes = CreateCategory.accepted_attributes


class DestroyCategory(CategoryRequestMixin, DestroyRequest):
    pass


class GetCategories(CategoryRequestMixin, ListRequest):
    collection_root = "categories"
