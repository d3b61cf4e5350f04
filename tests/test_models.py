from oxysound.domain.models import Playlist, Video


def _fetched(video_id, title):
    return Video(id=video_id, title=title, published_at="2009-10-25T06:57:33Z", fetched=True)


def test_new_playlist_defaults():
    playlist = Playlist(title="test")

    assert playlist.num_items == 0
    assert playlist.url == "http://www.youtube.com/watch_videos?video_ids="


def test_add_videos_updates_derived_fields():
    playlist = Playlist(title="test").add_videos(["id_1", "id_2"])

    assert playlist.ids == ("id_1", "id_2")
    assert playlist.num_items == 2
    assert playlist.url == "http://www.youtube.com/watch_videos?video_ids=id_1,id_2"


def test_add_videos_ignores_duplicates():
    playlist = Playlist(title="test").add_videos(["id_1", "id_2"])

    updated = playlist.add_videos(["id_2", "id_3", "id_3"])

    assert updated.ids == ("id_1", "id_2", "id_3")
    # the original instance is left untouched
    assert playlist.ids == ("id_1", "id_2")


def test_remove_videos_ignores_unknown_ids():
    playlist = Playlist(title="test").add_videos(["id_1", "id_2"])

    updated = playlist.remove_videos(["id_1", "nope"])

    assert updated.ids == ("id_2",)
    assert Playlist(title="test").remove_videos(["id_1"]).num_items == 0


def test_with_metadata_replaces_in_place():
    playlist = Playlist(title="test").add_videos(["id_1", "id_2", "id_3"])

    updated = playlist.with_metadata({"id_2": _fetched("id_2", "Second")})

    assert updated.ids == ("id_1", "id_2", "id_3")
    assert updated.videos[1].title == "Second"
    assert updated.unfetched_ids == ("id_1", "id_3")


def test_video_url_and_date():
    video = _fetched("dQw4w9WgXcQ", "Never Gonna Give You Up")

    assert video.url == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    assert video.published_date == "2009-10-25"
    assert Video(id="x").published_date == "unknown date"


def test_playlist_dict_uses_camel_case_keys():
    playlist = Playlist(title="test").add_videos(["id_1"])

    data = playlist.to_dict()

    assert data["numItems"] == 1
    assert data["url"] == "http://www.youtube.com/watch_videos?video_ids=id_1"
    assert data["videos"][0] == {
        "id": "id_1",
        "title": "",
        "publishedAt": "",
        "channel": "",
        "url": "https://www.youtube.com/watch?v=id_1",
        "fetched": False,
    }


def test_from_dict_tolerates_missing_optional_keys():
    playlist = Playlist.from_dict({"title": "old", "videos": [{"id": "id_1"}]})

    assert playlist.ids == ("id_1",)
    assert playlist.videos[0].fetched is False
