from setuptools import setup, find_packages


setup(
    name="fcrypto",
    version="0.1",
    packages=find_packages(include=["fcrypto", "fcrypto.*"]),
    description="Password-encrypted configuration files in a small versioned text container.",
    author="vercingetorx",
    python_requires=">=3.8",
    install_requires=[
        "pycryptodomex>=3.23.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "fcrypto=fcrypto.cli:main",
        ]
    },
)
