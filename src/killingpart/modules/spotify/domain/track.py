from dataclasses import dataclass

from pydantic import BaseModel

UNKNOWN_ARTIST = "Unknown Artist"


class SpotifyTokenResponse(BaseModel):
    access_token: str
    token_type: str
    expires_in: int


class SpotifyArtist(BaseModel):
    name: str


class SpotifyAlbumImage(BaseModel):
    url: str
    width: int | None = None
    height: int | None = None


class SpotifyAlbum(BaseModel):
    id: str
    images: list[SpotifyAlbumImage]

    def largest_image_url(self) -> str | None:
        if not self.images:
            return None
        return max(self.images, key=lambda image: image.width or 0).url


class SpotifyTrackItem(BaseModel):
    id: str
    name: str
    artists: list[SpotifyArtist]
    album: SpotifyAlbum

    def to_simple_track(self) -> 'SpotifySimpleTrack':
        artist_names = ", ".join(artist.name for artist in self.artists)
        return SpotifySimpleTrack(
            id=self.id,
            title=self.name,
            artist=artist_names or UNKNOWN_ARTIST,
            album_image_url=self.album.largest_image_url(),
            album_id=self.album.id,
        )


class SpotifyTracks(BaseModel):
    items: list[SpotifyTrackItem]


class SpotifySearchResponse(BaseModel):
    tracks: SpotifyTracks


@dataclass(frozen=True, slots=True)
class SpotifySimpleTrack:
    id: str
    title: str
    artist: str
    album_image_url: str | None
    album_id: str
