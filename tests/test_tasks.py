"""
Celery task tests - run the task bodies in-process with the ES helpers patched.
"""

from unittest.mock import patch

import pytest
from celery.exceptions import Retry

from catalog_graphql.core.exceptions import SearchEngineError
from catalog_graphql.queue import tasks
from catalog_graphql.queue.tasks import index_product_task, remove_product_task

DOC = {"id": "10", "sku": "SKU-10", "name": "Trail Jacket"}


def test_index_product_task_indexes_document(monkeypatch):
    indexed = []
    monkeypatch.setattr(tasks, "ensure_products_index_sync", lambda: None)
    monkeypatch.setattr(tasks, "index_product_sync", lambda doc: indexed.append(doc) or True)

    index_product_task(DOC)

    assert indexed == [DOC]


def test_index_product_task_retries_on_failure(monkeypatch):
    monkeypatch.setattr(tasks, "ensure_products_index_sync", lambda: None)
    monkeypatch.setattr(tasks, "index_product_sync", lambda doc: False)

    with patch.object(index_product_task, "retry", side_effect=Retry()) as retry:
        with pytest.raises(Retry):
            index_product_task(DOC)

    assert isinstance(retry.call_args.kwargs["exc"], SearchEngineError)
    assert retry.call_args.kwargs["countdown"] == 5


def test_remove_product_task_removes_document(monkeypatch):
    removed = []
    monkeypatch.setattr(tasks, "remove_product_sync", lambda product_id: removed.append(product_id) or True)

    remove_product_task("10")

    assert removed == ["10"]


def test_remove_product_task_retries_on_failure(monkeypatch):
    monkeypatch.setattr(tasks, "remove_product_sync", lambda product_id: False)

    with patch.object(remove_product_task, "retry", side_effect=Retry()) as retry:
        with pytest.raises(Retry):
            remove_product_task("10")

    assert "Removing product 10 failed" in str(retry.call_args.kwargs["exc"])
