"""
Example: check a handler that compresses its output

extract_body_to_string(decompress=True) undoes gzip, deflate or br
according to the response's Content-Encoding.
"""

import click

from handlertest import extract_body_to_bytes, extract_body_to_string, get
from handlertest.compression import encode_body
from handlertest.models import Response


class CompressingHandler:
    def handle(self, request):
        accepted = request.headers.get("Accept-Encoding", "identity")
        encoding = "br" if "br" in accepted else "gzip"
        body = encode_body(b"Hello, compressed world!", encoding)
        return Response(200, body, headers=[("Content-Encoding", encoding)])


def main() -> None:
    for accept in ("br", "gzip"):
        response = get(
            "http://localhost:3000/",
            CompressingHandler(),
            headers={"Accept-Encoding": accept},
        )
        raw = extract_body_to_bytes(response)
        text = extract_body_to_string(response, decompress=True)
        click.secho(f"{accept}: {len(raw)} bytes on the wire -> {text!r}", fg="cyan")


if __name__ == "__main__":
    main()
