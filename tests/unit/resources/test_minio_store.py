"""
Unit tests for MinIOObjectStore.

Tests all methods with mocked minio.Minio client to avoid network calls.
"""

from unittest.mock import Mock, patch

import pytest
from minio.error import S3Error

from ol_consolidation.consolidation import consolidate
from ol_consolidation.discovery import DiscoveredKeys
from ol_consolidation.errors import ObjectNotFoundError, RecordDeserializationError
from ol_consolidation.models import MinIOSettings, StrictnessMode
from ol_consolidation.resources import MinIOObjectStore
from ol_consolidation.store import ObjectStore

MINIO_PATH = "ol_consolidation.resources.minio_store.Minio"


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def minio_store():
    """Create a MinIOObjectStore instance with test configuration."""
    return MinIOObjectStore(
        endpoint="localhost:9000",
        access_key="test_access",
        secret_key="test_secret",
        use_ssl=False,
    )


def _s3_error(code, resource="test"):
    return S3Error(
        code,
        f"{code} raised by test",
        resource=resource,
        request_id="test",
        host_id="test",
        response=Mock(status=404),
    )


def _listed(name, is_dir=False):
    obj = Mock()
    obj.object_name = name
    obj.is_dir = is_dir
    return obj


# =============================================================================
# Test: get_client
# =============================================================================


def test_get_client(minio_store):
    """Test that get_client creates a properly configured Minio client once."""
    with patch(MINIO_PATH) as mock_minio:
        first = minio_store.get_client()
        second = minio_store.get_client()

        assert first is second

        mock_minio.assert_called_once_with(
            "localhost:9000",
            access_key="test_access",
            secret_key="test_secret",
            secure=False,
        )


def test_from_settings():
    """Test that the resource can be built from MinIOSettings."""
    settings = MinIOSettings(
        MINIO_ENDPOINT="minio:9000",
        MINIO_ROOT_USER="user",
        MINIO_ROOT_PASSWORD="secret",
        MINIO_USE_SSL=True,
    )

    store = MinIOObjectStore.from_settings(settings)

    assert store.endpoint == "minio:9000"
    assert store.access_key == "user"
    assert store.secret_key == "secret"
    assert store.use_ssl is True


def test_from_settings_reads_environment(monkeypatch):
    """Test that from_settings falls back to the MINIO_* variables."""
    monkeypatch.setenv("MINIO_ENDPOINT", "env-minio:9000")
    monkeypatch.setenv("MINIO_ROOT_USER", "env-user")
    monkeypatch.setenv("MINIO_ROOT_PASSWORD", "env-secret")
    monkeypatch.delenv("MINIO_USE_SSL", raising=False)

    store = MinIOObjectStore.from_settings()

    assert store.endpoint == "env-minio:9000"
    assert store.access_key == "env-user"
    assert store.use_ssl is False


def test_is_registered_object_store(minio_store):
    """Test that the resource satisfies the ObjectStore port."""
    assert isinstance(minio_store, ObjectStore)


# =============================================================================
# Test: exists
# =============================================================================


@pytest.mark.asyncio
async def test_exists_true_when_stat_succeeds(minio_store):
    with patch(MINIO_PATH) as mock_minio:
        mock_client = Mock()
        mock_minio.return_value = mock_client

        assert await minio_store.exists("lineage", "R1/Input/ABC") is True

        mock_client.stat_object.assert_called_once_with("lineage", "R1/Input/ABC")


@pytest.mark.asyncio
async def test_exists_false_on_no_such_key(minio_store):
    with patch(MINIO_PATH) as mock_minio:
        mock_client = Mock()
        mock_client.stat_object.side_effect = _s3_error("NoSuchKey")
        mock_minio.return_value = mock_client

        assert await minio_store.exists("lineage", "R1/Input/ABC") is False


@pytest.mark.asyncio
async def test_exists_raises_on_missing_bucket(minio_store):
    with patch(MINIO_PATH) as mock_minio:
        mock_client = Mock()
        mock_client.stat_object.side_effect = _s3_error("NoSuchBucket")
        mock_minio.return_value = mock_client

        with pytest.raises(RuntimeError, match="Container 'lineage' does not exist"):
            await minio_store.exists("lineage", "R1/Input/ABC")


@pytest.mark.asyncio
async def test_exists_propagates_other_errors(minio_store):
    with patch(MINIO_PATH) as mock_minio:
        mock_client = Mock()
        mock_client.stat_object.side_effect = _s3_error("AccessDenied")
        mock_minio.return_value = mock_client

        with pytest.raises(S3Error):
            await minio_store.exists("lineage", "R1/Input/ABC")


# =============================================================================
# Test: write_if_absent
# =============================================================================


@pytest.mark.asyncio
async def test_write_uploads_utf8_json(minio_store):
    payload = '{"namespace": "ns", "name": "données"}'

    with patch(MINIO_PATH) as mock_minio:
        mock_client = Mock()
        mock_minio.return_value = mock_client

        await minio_store.write_if_absent("lineage", "R1/Input/ABC", payload)

        args, kwargs = mock_client.put_object.call_args
        assert args[0] == "lineage"
        assert args[1] == "R1/Input/ABC"
        assert args[2].read() == payload.encode("utf-8")
        assert kwargs["length"] == len(payload.encode("utf-8"))
        assert kwargs["content_type"] == "application/json"


@pytest.mark.asyncio
async def test_write_raises_on_missing_bucket(minio_store):
    with patch(MINIO_PATH) as mock_minio:
        mock_client = Mock()
        mock_client.put_object.side_effect = _s3_error("NoSuchBucket")
        mock_minio.return_value = mock_client

        with pytest.raises(RuntimeError, match="does not exist"):
            await minio_store.write_if_absent("lineage", "k", "{}")


# =============================================================================
# Test: read
# =============================================================================


@pytest.mark.asyncio
async def test_read_returns_text_and_releases_connection(minio_store):
    with patch(MINIO_PATH) as mock_minio:
        mock_client = Mock()
        mock_response = Mock()
        mock_response.read.return_value = b'{"namespace": "ns", "name": "n"}'
        mock_client.get_object.return_value = mock_response
        mock_minio.return_value = mock_client

        result = await minio_store.read("lineage", "R1/Output/ABC")

        assert result == '{"namespace": "ns", "name": "n"}'
        mock_client.get_object.assert_called_once_with("lineage", "R1/Output/ABC")
        mock_response.close.assert_called_once()
        mock_response.release_conn.assert_called_once()


@pytest.mark.asyncio
async def test_read_missing_raises_not_found(minio_store):
    with patch(MINIO_PATH) as mock_minio:
        mock_client = Mock()
        mock_client.get_object.side_effect = _s3_error("NoSuchKey")
        mock_minio.return_value = mock_client

        with pytest.raises(ObjectNotFoundError) as exc_info:
            await minio_store.read("lineage", "R1/Output/ABC")

        assert exc_info.value.key == "R1/Output/ABC"


@pytest.mark.asyncio
async def test_read_releases_connection_on_stream_error(minio_store):
    with patch(MINIO_PATH) as mock_minio:
        mock_client = Mock()
        mock_response = Mock()
        mock_response.read.side_effect = ConnectionError("reset")
        mock_client.get_object.return_value = mock_response
        mock_minio.return_value = mock_client

        with pytest.raises(ConnectionError):
            await minio_store.read("lineage", "R1/Output/ABC")

        mock_response.release_conn.assert_called_once()


# =============================================================================
# Test: list_by_prefix
# =============================================================================


@pytest.mark.asyncio
async def test_list_by_prefix_returns_object_names(minio_store):
    with patch(MINIO_PATH) as mock_minio:
        mock_client = Mock()
        mock_client.list_objects.return_value = [
            _listed("R1/Input/AAA"),
            _listed("R1/Input/BBB"),
            _listed("R1/Input/nested/", is_dir=True),
        ]
        mock_minio.return_value = mock_client

        result = await minio_store.list_by_prefix("lineage", "R1/Input/")

        assert result == ["R1/Input/AAA", "R1/Input/BBB"]
        mock_client.list_objects.assert_called_once_with(
            "lineage",
            prefix="R1/Input/",
            recursive=True,
        )


@pytest.mark.asyncio
async def test_list_by_prefix_empty(minio_store):
    with patch(MINIO_PATH) as mock_minio:
        mock_client = Mock()
        mock_client.list_objects.return_value = []
        mock_minio.return_value = mock_client

        assert await minio_store.list_by_prefix("lineage", "R1/Output/") == []


@pytest.mark.asyncio
async def test_list_by_prefix_raises_on_missing_bucket(minio_store):
    with patch(MINIO_PATH) as mock_minio:
        mock_client = Mock()
        mock_client.list_objects.side_effect = _s3_error("NoSuchBucket")
        mock_minio.return_value = mock_client

        with pytest.raises(RuntimeError, match="Container 'lineage' does not exist"):
            await minio_store.list_by_prefix("lineage", "R1/Output/")


@pytest.mark.asyncio
async def test_calls_share_one_client(minio_store):
    with patch(MINIO_PATH) as mock_minio:
        mock_client = Mock()
        mock_client.list_objects.return_value = []
        mock_minio.return_value = mock_client

        await minio_store.exists("lineage", "R1/Input/ABC")
        await minio_store.write_if_absent("lineage", "R1/Input/ABC", "{}")
        await minio_store.list_by_prefix("lineage", "R1/Input/")

        assert mock_minio.call_count == 1


@pytest.mark.asyncio
async def test_read_undecodable_bytes(minio_store):
    with patch(MINIO_PATH) as mock_minio:
        mock_client = Mock()
        mock_client.get_object.return_value.read.return_value = b"\xff\xfe garbage"
        mock_minio.return_value = mock_client

        with pytest.raises(UnicodeDecodeError):
            await minio_store.read("lineage", "R1/Input/ABC")


# =============================================================================
# Test: consolidation over MinIO
# =============================================================================


def _serving(payloads):
    """get_object side effect returning stored bytes per key."""
    def _get_object(container, key):
        response = Mock()
        response.read.return_value = payloads[key]
        return response
    return _get_object


@pytest.mark.asyncio
async def test_consolidate_drops_undecodable_record(minio_store, make_event, make_input, make_output):
    ds_out = make_output("/out")
    payloads = {
        "R1/Input/BAD": b"\xff\xfe garbage",
        "R1/Output/GOOD": ds_out.to_payload().encode("utf-8"),
    }
    original_inputs = [make_input("/partial")]
    trigger = make_event(inputs=original_inputs)

    with patch(MINIO_PATH) as mock_minio:
        mock_client = Mock()
        mock_client.get_object.side_effect = _serving(payloads)
        mock_minio.return_value = mock_client

        result = await consolidate(
            minio_store,
            trigger,
            DiscoveredKeys(inputs=["R1/Input/BAD"], outputs=["R1/Output/GOOD"]),
            container="lineage",
        )

    assert result is trigger
    assert result.inputs == original_inputs
    assert result.outputs == [ds_out]


@pytest.mark.asyncio
async def test_consolidate_strict_rejects_undecodable_record(minio_store, make_event, make_output):
    payloads = {
        "R1/Input/BAD": b"\xff\xfe garbage",
        "R1/Output/GOOD": make_output("/out").to_payload().encode("utf-8"),
    }

    with patch(MINIO_PATH) as mock_minio:
        mock_client = Mock()
        mock_client.get_object.side_effect = _serving(payloads)
        mock_minio.return_value = mock_client

        with pytest.raises(RecordDeserializationError) as exc_info:
            await consolidate(
                minio_store,
                make_event(),
                DiscoveredKeys(inputs=["R1/Input/BAD"], outputs=["R1/Output/GOOD"]),
                container="lineage",
                strictness=StrictnessMode.FAIL,
            )

    assert exc_info.value.key == "R1/Input/BAD"
