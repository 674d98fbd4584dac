from typing import Protocol

from ...domain.diary import DiaryCreateRequest, DiaryCreateResult, DiaryUpdateRequest, MyDiaryFeeds


class DiaryGateway(Protocol):
    async def fetch_my_feeds(self, page: int = 0, size: int = 5) -> MyDiaryFeeds: ...

    async def create_diary(self, request: DiaryCreateRequest) -> DiaryCreateResult: ...

    async def update_diary(self, diary_id: int, request: DiaryUpdateRequest) -> None: ...

    async def delete_diary(self, diary_id: int) -> None: ...
