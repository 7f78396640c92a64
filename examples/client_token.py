"""Mint a scoped client token for a browser upload."""

import os
import time

from dotenv import load_dotenv

from vercel_blob import ClientTokenOptions, generate_client_token, get_payload_from_client_token

load_dotenv()


def main() -> None:
    secret = os.getenv("BLOB_READ_WRITE_TOKEN")
    assert secret, "Set BLOB_READ_WRITE_TOKEN"

    token = generate_client_token(
        secret,
        ClientTokenOptions(
            operation="put",
            pathname="avatars/user-123.png",
            expires_at=int(time.time()) + 300,
        ),
    )
    print("client token:", token)
    print("payload:", get_payload_from_client_token(token))


if __name__ == "__main__":
    main()
