"""Service classes shared by the test suite.

Service1 needs Service2 and Service3, Service2 needs Service4.
"""

from __future__ import annotations


class Service4:
    pass


class Service3:
    pass


class Service2:
    def __init__(self, service4: Service4) -> None:
        self.service4 = service4


class Service1:
    def __init__(self, service2: Service2, service3: Service3) -> None:
        self.service2 = service2
        self.service3 = service3


def new_service2(service4: Service4) -> Service2:
    return Service2(service4)


def new_service1_needing_service1(service1: Service1) -> Service1:
    return service1


def new_service2_needing_service1(service1: Service1) -> Service2:
    return Service2(Service4())
