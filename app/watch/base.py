from abc import ABC, abstractmethod


class FrameSourceBase(ABC):
    """Источник новых кадров. Сообщает о файлах через FileList"""

    @abstractmethod
    def start(self) -> None:
        """Starts delivering events"""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stops delivering events and waits for any worker to finish"""
        pass

    @abstractmethod
    def is_running(self) -> bool:
        pass
