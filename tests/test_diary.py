import json

import httpx
import pytest

from killingpart.common.errors import ServiceErrorCode
from killingpart.common.events import AppEvent
from killingpart.modules.diary.domain.diary import (
    DiaryCreateRequest,
    DiaryScope,
    DiaryUpdateRequest,
)
from killingpart.modules.diary.domain.errors import DiaryServiceError
from killingpart.modules.diary.infra.gateways.diary import ApiDiaryGateway

from conftest import reply

FEED = {
    "diaryId": 12,
    "artist": "NewJeans",
    "musicTitle": "Hype Boy",
    "albumImageUrl": "i.scdn.co/image/ab67",
    "content": "chorus hits",
    "videoUrl": "https://www.youtube.com/embed/11cta61wi0g",
    "scope": "KILLING_PART",
    "duration": "15",
    "totalDuration": "179",
    "start": "42",
    "end": "57",
    "createDate": "2025-01-01T10:00:00",
    "updateDate": "2025-01-01T10:00:00",
    "isLiked": False,
    "isStored": True,
    "likeCount": 3,
    "userId": 1,
    "username": "kp",
}
FEEDS = {
    "content": [FEED],
    "page": {"size": 5, "number": 0, "totalElements": 1, "totalPages": 1},
}


@pytest.fixture
def diaries(api_client, events) -> ApiDiaryGateway:
    return ApiDiaryGateway(api_client, events)


@pytest.fixture(autouse=True)
def signed_in(token_store):
    token_store.save("a1", "r1")


def new_diary() -> DiaryCreateRequest:
    return DiaryCreateRequest.from_clip(
        artist="NewJeans",
        music_title="Hype Boy",
        album_image_url="https://i.scdn.co/image/ab67",
        video_url="https://www.youtube.com/embed/11cta61wi0g",
        scope=DiaryScope.PUBLIC,
        content="chorus hits",
        start_seconds=42.7,
        end_seconds=57.2,
        total_seconds=179.9,
    )


class TestFetchMyFeeds:

    async def test_parses_page(self, diaries, backend):
        backend.add('GET', '/diaries/my', reply(200, json=FEEDS))

        feeds = await diaries.fetch_my_feeds(page=2, size=10)

        assert [feed.id for feed in feeds.content] == [12]
        feed = feeds.content[0]
        assert feed.scope is DiaryScope.KILLING_PART
        assert feed.music_title == "Hype Boy"
        assert feed.tag is None
        assert not feeds.has_next()
        params = backend.requests[0].url.params
        assert (params['page'], params['size']) == ("2", "10")
        assert backend.requests[0].headers['authorization'] == "Bearer a1"

    @pytest.mark.parametrize(("page", "size"), [(-1, 0), (-10, -3)])
    async def test_clamps_paging(self, diaries, backend, page, size):
        backend.add('GET', '/diaries/my', reply(200, json=FEEDS))

        await diaries.fetch_my_feeds(page=page, size=size)

        params = backend.requests[0].url.params
        assert (params['page'], params['size']) == ("0", "5")

    async def test_bad_payload_is_decoding_failure(self, diaries, backend):
        backend.add('GET', '/diaries/my', reply(200, json={"content": "nope"}))

        with pytest.raises(DiaryServiceError) as exc_info:
            await diaries.fetch_my_feeds()

        assert exc_info.value.code is ServiceErrorCode.DECODING_FAILED
        assert exc_info.value.user_message == "응답 파싱에 실패했어요."

    async def test_expired_session(self, diaries, backend, token_store, recorded_events):
        backend.add('GET', '/diaries/my', reply(401))
        backend.add('POST', '/jwt/exchange', reply(401))

        with pytest.raises(DiaryServiceError) as exc_info:
            await diaries.fetch_my_feeds()

        assert exc_info.value.code is ServiceErrorCode.SESSION_EXPIRED
        assert exc_info.value.user_message == "세션이 만료되었어요. 다시 로그인해 주세요."
        assert not token_store.has_valid_session()
        assert recorded_events.count(AppEvent.SESSION_EXPIRED) == 1

    async def test_server_message_is_shown(self, diaries, backend):
        backend.add('GET', '/diaries/my', reply(500, json={"message": "일기를 불러올 수 없어요"}))

        with pytest.raises(DiaryServiceError) as exc_info:
            await diaries.fetch_my_feeds()

        assert exc_info.value.code is ServiceErrorCode.SERVER_ERROR
        assert exc_info.value.status_code == 500
        assert exc_info.value.user_message == "일기를 불러올 수 없어요"

    async def test_network_failure(self, diaries, backend):
        def offline(request):
            raise httpx.ConnectError("offline", request=request)

        backend.add('GET', '/diaries/my', offline)

        with pytest.raises(DiaryServiceError) as exc_info:
            await diaries.fetch_my_feeds()

        assert exc_info.value.code is ServiceErrorCode.NETWORK_FAILURE


class TestCreateDiary:

    async def test_returns_id_from_location(self, diaries, backend, recorded_events):
        backend.add('POST', '/diaries', reply(201, headers={'Location': '/diaries/31'}))

        result = await diaries.create_diary(new_diary())

        assert result.diary_id == 31
        assert result.location == '/diaries/31'
        assert recorded_events.received == [AppEvent.DIARY_CHANGED]

        sent = backend.requests[0]
        assert sent.headers['content-type'] == 'application/json'
        body = json.loads(sent.content)
        assert body == {
            "artist": "NewJeans",
            "musicTitle": "Hype Boy",
            "albumImageUrl": "https://i.scdn.co/image/ab67",
            "videoUrl": "https://www.youtube.com/embed/11cta61wi0g",
            "scope": "PUBLIC",
            "content": "chorus hits",
            "duration": "14",
            "totalDuration": "179",
            "start": "42",
            "end": "57",
        }

    async def test_missing_location(self, diaries, backend):
        backend.add('POST', '/diaries', reply(201))

        result = await diaries.create_diary(new_diary())

        assert result.diary_id is None
        assert result.location is None

    async def test_failure_emits_nothing(self, diaries, backend, recorded_events):
        backend.add('POST', '/diaries', reply(400, json={"message": "내용을 입력해 주세요"}))

        with pytest.raises(DiaryServiceError) as exc_info:
            await diaries.create_diary(new_diary())

        assert exc_info.value.user_message == "내용을 입력해 주세요"
        assert recorded_events.received == []


class TestUpdateAndDelete:

    async def test_update_sends_only_set_fields(self, diaries, backend, recorded_events):
        backend.add('PUT', '/diaries/12', reply(204))

        await diaries.update_diary(12, DiaryUpdateRequest(content="new text", scope=DiaryScope.PRIVATE))

        assert json.loads(backend.requests[0].content) == {"content": "new text", "scope": "PRIVATE"}
        assert recorded_events.received == [AppEvent.DIARY_CHANGED]

    async def test_delete(self, diaries, backend, recorded_events):
        backend.add('DELETE', '/diaries/12', reply(204))

        await diaries.delete_diary(12)

        assert backend.requests[0].headers['authorization'] == "Bearer a1"
        assert recorded_events.received == [AppEvent.DIARY_CHANGED]

    async def test_delete_without_session(self, diaries, backend, token_store):
        token_store.clear()

        with pytest.raises(DiaryServiceError) as exc_info:
            await diaries.delete_diary(12)

        assert exc_info.value.code is ServiceErrorCode.SESSION_EXPIRED
        assert backend.requests == []
