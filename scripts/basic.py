from __future__ import annotations

import os

import fcrypto


SECRET = "bar"
FILE = "secret.conf"


def main() -> None:
    if not os.path.exists(FILE):
        print("Saving a file with 'foobar'")
        fcrypto.save_file(b"foobar", FILE, SECRET)
    else:
        print("Loading existing " + FILE)

    content = fcrypto.load_file(FILE, SECRET)
    print("Decrypting the file...")
    print("File content: " + content.decode("utf-8"))


if __name__ == "__main__":
    main()
