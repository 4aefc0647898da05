import io

import pytest

from zpl_interpreter import Stream, StreamError


class _Pipe(io.RawIOBase):
    def readable(self):
        return True


class _FailingReader(io.BytesIO):
    def read(self, size=-1):
        raise OSError("device unplugged")


class _UntellableReader(io.BytesIO):
    def tell(self):
        raise OSError("position unavailable")


def test_next_and_peek():
    stream = Stream(io.BytesIO(b"^XA"))
    assert stream.size == 3
    assert stream.peek() == b"^"
    assert stream.position == 0
    assert stream.next() == b"^"
    assert stream.next() == b"X"
    assert stream.position == 2
    assert stream.next() == b"A"
    assert not stream.at_end
    assert stream.next() == b""
    assert stream.at_end
    assert stream.peek() == b""


def test_reset_and_seek():
    stream = Stream(io.BytesIO(b"^FO1,2"))
    stream.seek(3)
    assert stream.next() == b"1"
    stream.seek(-2)
    assert stream.next() == b"O"
    while stream.next():
        pass
    assert stream.at_end

    stream.reset()
    assert not stream.at_end
    assert stream.position == 0
    assert stream.next() == b"^"


def test_context_manager_closes_resource():
    resource = io.BytesIO(b"^XA^XZ")
    with Stream(resource) as stream:
        assert stream.next() == b"^"
    assert resource.closed
    assert stream.closed
    stream.close()


def test_non_seekable_source_is_rejected():
    pipe = _Pipe()
    with pytest.raises(StreamError, match="not seekable"):
        Stream(pipe)
    assert pipe.closed


def test_resource_is_closed_when_length_is_unavailable():
    reader = _UntellableReader(b"^XA^XZ")
    with pytest.raises(StreamError, match="Unable to get stream length"):
        Stream(reader)
    assert reader.closed


def test_position_on_closed_stream_raises():
    stream = Stream(io.BytesIO(b"^XA"))
    stream.close()
    with pytest.raises(StreamError):
        stream.position


def test_read_failure_is_not_end_of_input():
    stream = Stream(_FailingReader(b"^XA"))
    with pytest.raises(StreamError, match="position 0"):
        stream.next()
    assert not stream.at_end


def test_stream_error_is_an_os_error():
    assert issubclass(StreamError, OSError)
