import asyncio
import io
import os

from dotenv import load_dotenv

from vercel_blob import AsyncBlobClient, BlobClient, BlobNotFoundError

load_dotenv()


def sync_example(token: str) -> None:
    with BlobClient(token) as client:
        # 1) Upload a small text file
        uploaded = client.put(
            "examples/assets/hello.txt",
            b"hello from python",
            content_type="text/plain",
            add_random_suffix=True,
        )
        print("uploaded:", uploaded.url)

        # 2) Inspect it
        meta = client.head(uploaded.pathname)
        print("size:", meta.size, "uploaded at:", meta.uploaded_at.isoformat())

        # 3) Download the first five bytes
        print("range:", client.download(uploaded.url, byte_range=(0, 4)))

        # 4) Copy it and list the folder
        copied = client.copy(uploaded.url, "examples/assets/hello-copy.txt")
        for item in client.iter_objects(prefix="examples/assets/"):
            print(" -", item.pathname, item.size)

        # 5) Clean up
        client.delete([uploaded.url, copied.url])
        try:
            client.head(uploaded.pathname)
        except BlobNotFoundError:
            print("deleted:", uploaded.pathname)


async def async_example(token: str) -> None:
    async with AsyncBlobClient(token) as client:
        # Bodies over 5 MiB go out as a multipart upload
        body = io.BytesIO(os.urandom(12 * 1024 * 1024))
        uploaded = await client.put("examples/assets/large.bin", body, add_random_suffix=True)
        meta = await client.head(uploaded.pathname)
        print("multipart upload:", uploaded.pathname, meta.size)
        await client.delete(uploaded.url)


def main() -> None:
    token = os.getenv("BLOB_READ_WRITE_TOKEN")
    assert token, "Set BLOB_READ_WRITE_TOKEN"

    sync_example(token)
    asyncio.run(async_example(token))


if __name__ == "__main__":
    main()
