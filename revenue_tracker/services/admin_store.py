"""
管理接口的内存键值存储

按已认证用户名保存最后一次提交的值，进程重启后丢失。
"""
import threading


class AdminStore:
    def __init__(self) -> None:
        self._values: dict[str, str] = {}
        self._lock = threading.Lock()

    def set(self, username: str, value: str) -> None:
        with self._lock:
            self._values[username] = value

    def get(self, username: str) -> str | None:
        with self._lock:
            return self._values.get(username)
