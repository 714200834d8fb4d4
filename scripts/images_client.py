#!/usr/bin/env python3
"""
Command-line client for the image asset store.

Examples:
    python scripts/images_client.py list
    python scripts/images_client.py add ./cat.png
    python scripts/images_client.py update 3 ./dog.jpg
    python scripts/images_client.py delete 3
    python scripts/images_client.py download 3 ./copy.jpg
"""

from __future__ import annotations

import argparse
import base64
import json
import mimetypes
import sys
import urllib.error
import urllib.request
import uuid
from pathlib import Path
from typing import Any, Optional


def http_request(url: str, method: str = "GET", data: Optional[bytes] = None,
                 headers: Optional[dict[str, str]] = None, timeout: int = 30) -> tuple[int, bytes]:
    req = urllib.request.Request(url, data=data, headers=headers or {}, method=method)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return resp.status, resp.read()
    except urllib.error.HTTPError as exc:
        return exc.code, exc.read()


def http_send_file(url: str, method: str, path: Path, timeout: int = 120) -> tuple[int, bytes]:
    boundary = "----ImageStoreBoundary" + uuid.uuid4().hex
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    body = bytearray()
    body.extend(f"--{boundary}\r\n".encode("utf-8"))
    body.extend(f'Content-Disposition: form-data; name="file"; filename="{path.name}"\r\n'.encode("utf-8"))
    body.extend(f"Content-Type: {content_type}\r\n\r\n".encode("utf-8"))
    body.extend(path.read_bytes())
    body.extend(f"\r\n--{boundary}--\r\n".encode("utf-8"))
    headers = {"Content-Type": f"multipart/form-data; boundary={boundary}"}
    return http_request(url, method=method, data=bytes(body), headers=headers, timeout=timeout)


def check(status: int, body: bytes, expected: int = 200) -> None:
    if status == expected:
        return
    try:
        detail = json.loads(body.decode("utf-8")).get("detail")
    except (ValueError, AttributeError):
        detail = body.decode(errors="ignore")
    raise SystemExit(f"server error {status}: {detail}")


def format_image(image: dict[str, Any]) -> str:
    size = len(base64.b64decode(image["data"]))
    return f"{image['id']:>6}  {image['name']}  {image['contentType']}  {size} bytes  {image['createdAt']}"


def cmd_list(base: str, args: argparse.Namespace) -> None:
    status, body = http_request(f"{base}/all")
    check(status, body)
    images = json.loads(body.decode("utf-8"))
    if not images:
        print("no images")
    for image in images:
        print(format_image(image))


def cmd_add(base: str, args: argparse.Namespace) -> None:
    status, body = http_send_file(f"{base}/add", "POST", Path(args.path))
    check(status, body)
    print("[done] image added")
    print(format_image(json.loads(body.decode("utf-8"))))


def cmd_update(base: str, args: argparse.Namespace) -> None:
    status, body = http_send_file(f"{base}/update/{args.id}", "PUT", Path(args.path))
    check(status, body)
    print("[done] image updated")
    print(format_image(json.loads(body.decode("utf-8"))))


def cmd_delete(base: str, args: argparse.Namespace) -> None:
    status, body = http_request(f"{base}/delete/{args.id}", method="DELETE")
    check(status, body, expected=204)
    print("[done] image deleted")


def cmd_download(base: str, args: argparse.Namespace) -> None:
    status, body = http_request(f"{base}/{args.id}/content")
    check(status, body)
    Path(args.out).write_bytes(body)
    print(f"[done] wrote {len(body)} bytes to {args.out}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Manage images on an image asset store")
    parser.add_argument("--server", default="http://127.0.0.1:8000", help="Image store base URL")
    parser.add_argument("--api-prefix", default="/api", help="API prefix configured on the server")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List all images, newest first").set_defaults(func=cmd_list)

    add = sub.add_parser("add", help="Upload a new image")
    add.add_argument("path")
    add.set_defaults(func=cmd_add)

    update = sub.add_parser("update", help="Replace the file of an existing image")
    update.add_argument("id", type=int)
    update.add_argument("path")
    update.set_defaults(func=cmd_update)

    delete = sub.add_parser("delete", help="Delete an image")
    delete.add_argument("id", type=int)
    delete.set_defaults(func=cmd_delete)

    download = sub.add_parser("download", help="Save an image's bytes to a file")
    download.add_argument("id", type=int)
    download.add_argument("out")
    download.set_defaults(func=cmd_download)

    args = parser.parse_args()
    base = args.server.rstrip("/") + args.api_prefix.rstrip("/") + "/images"
    args.func(base, args)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit("aborted by user")
