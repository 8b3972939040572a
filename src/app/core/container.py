"""의존성 주입 컨테이너"""
from typing import Any, Callable, Dict, Type, TypeVar

T = TypeVar('T')


class DIContainer:
    """간단한 의존성 주입 컨테이너"""

    def __init__(self):
        self._singletons: Dict[Type, Any] = {}
        self._factories: Dict[Type, Callable[[], Any]] = {}

    def register_singleton(self, interface: Type[T], implementation: T) -> None:
        """싱글톤 인스턴스 등록"""
        self._singletons[interface] = implementation

    def register_transient(self, interface: Type[T], factory_func: Callable[[], T]) -> None:
        """팩토리 함수 등록 (매번 새 인스턴스 생성)"""
        self._factories[interface] = factory_func

    def get(self, interface: Type[T]) -> T:
        """서비스 인스턴스 조회"""
        if interface in self._singletons:
            return self._singletons[interface]

        if interface in self._factories:
            return self._factories[interface]()

        interface_name = getattr(interface, "__name__", repr(interface))
        raise ValueError(f"Service {interface_name} not registered")

    def clear(self) -> None:
        """등록 정보 초기화 (테스트용)"""
        self._singletons.clear()
        self._factories.clear()


# 전역 컨테이너 인스턴스
container = DIContainer()
