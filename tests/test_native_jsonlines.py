import io
import json

import pytest

from native.jsonlines import (
    Decoder,
    Encoder,
    FrameDecodeError,
    FrameEncodeError,
    FrameWriteError,
    StreamClosedError,
    encode_frame,
)
from native.models import ParseRequest, ParseResponse, Status


class BrokenPipe(io.BytesIO):
    def write(self, _data):
        raise BrokenPipeError(32, "Broken pipe")


def test_encoder_writes_one_line_per_message():
    out = io.BytesIO()
    encoder = Encoder(out)

    encoder.encode(ParseRequest(content="x = 1", encoding="utf8"))
    encoder.encode({"content": "ü", "Encoding": "utf8"})

    lines = out.getvalue().decode("utf-8").splitlines()
    assert lines == [
        '{"content":"x = 1","Encoding":"utf8"}',
        '{"content":"ü","Encoding":"utf8"}',
    ]


def test_encoder_wraps_pipe_errors():
    with pytest.raises(FrameWriteError, match="Broken pipe"):
        Encoder(BrokenPipe()).encode({"content": ""})


def test_encoder_wraps_closed_stream():
    out = io.BytesIO()
    out.close()
    with pytest.raises(FrameWriteError):
        Encoder(out).encode({"content": ""})


def test_decoder_validates_model_and_skips_blank_lines():
    stream = io.BytesIO(b'\n\n{"status":"OK","errors":null,"ast":{"@type":"File"}}\n')

    response = Decoder(stream).decode(ParseResponse)

    assert response.status is Status.OK
    assert response.errors == []
    assert response.ast == {"@type": "File"}


def test_decoder_returns_plain_json_without_model():
    stream = io.BytesIO(json.dumps([1, "two"]).encode() + b"\n")
    assert Decoder(stream).decode() == [1, "two"]


def test_decoder_reports_end_of_stream():
    with pytest.raises(StreamClosedError):
        Decoder(io.BytesIO(b"")).decode(ParseResponse)


def test_decoder_rejects_invalid_json():
    with pytest.raises(FrameDecodeError, match="invalid JSON"):
        Decoder(io.BytesIO(b"panic: runtime error\n")).decode(ParseResponse)


def test_decoder_rejects_invalid_tree():
    stream = io.BytesIO(b'{"status":"ok","errors":[],"ast":{"Body":[1,2]},"extra":1}\n{"status":3}\n')
    decoder = Decoder(stream)

    assert decoder.decode(ParseResponse).ast == {"Body": [1, 2]}
    with pytest.raises(FrameDecodeError, match="invalid ParseResponse"):
        decoder.decode(ParseResponse)


def test_decode_raw_returns_line_text():
    decoder = Decoder(io.BytesIO(b"core dumped\r\nnext\n"))
    assert decoder.decode_raw() == "core dumped"
    assert decoder.decode_raw() == "next"
    with pytest.raises(StreamClosedError):
        decoder.decode_raw()


def test_unencodable_message_is_not_a_write_failure():
    out = io.BytesIO()

    with pytest.raises(FrameEncodeError):
        Encoder(out).encode({"content": "\ud800"})
    with pytest.raises(FrameEncodeError):
        encode_frame({"content": object()})

    assert out.getvalue() == b""
