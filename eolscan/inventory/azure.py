"""
eolscan/inventory/azure.py - Azure 구독/VM 조회

azure-mgmt-resource / azure-mgmt-compute 클라이언트의 페이저를
VMSource 인터페이스로 감쌉니다. SDK 모델은 serialize(keep_readonly=True)로
ARM REST 응답 형태의 dict로 변환하여 넘깁니다.

인증은 전달받은 credential을 그대로 사용합니다. 기본값은 Azure CLI
로그인 세션(AzureCliCredential)입니다.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from typing import Any

from azure.identity import AzureCliCredential
from azure.mgmt.compute import ComputeManagementClient
from azure.mgmt.resource import SubscriptionClient

from .source import Page

logger = logging.getLogger(__name__)


class AzureVMSource:
    """Azure 테넌트의 구독/VM 페이지 조회

    Example:
        source = AzureVMSource()
        for page in source.iter_subscription_pages():
            for sub in page:
                print(sub["subscriptionId"])
    """

    def __init__(self, credential: Any = None):
        self.credential = credential or AzureCliCredential()
        self._subscription_client = SubscriptionClient(self.credential)
        self._compute_clients: dict[str, ComputeManagementClient] = {}
        self._clients_lock = threading.Lock()

    def _get_compute_client(self, subscription_id: str) -> ComputeManagementClient:
        """구독별 Compute 클라이언트 (구독당 1회 생성)"""
        with self._clients_lock:
            client = self._compute_clients.get(subscription_id)
            if client is None:
                client = ComputeManagementClient(self.credential, subscription_id)
                logger.debug(f"Compute 클라이언트 생성: {subscription_id}")
                self._compute_clients[subscription_id] = client
            return client

    def iter_subscription_pages(self) -> Iterator[Page]:
        for page in self._subscription_client.subscriptions.list().by_page():
            yield [subscription.serialize(keep_readonly=True) for subscription in page]

    def iter_vm_pages(self, subscription_id: str) -> Iterator[Page]:
        client = self._get_compute_client(subscription_id)
        for page in client.virtual_machines.list_all().by_page():
            yield [vm.serialize(keep_readonly=True) for vm in page]

    def close(self) -> None:
        """SDK 클라이언트 연결 정리"""
        with self._clients_lock:
            clients = list(self._compute_clients.values())
            self._compute_clients.clear()
        for client in clients:
            client.close()
        self._subscription_client.close()
