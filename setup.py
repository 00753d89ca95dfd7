from setuptools import find_packages, setup


setup(
    name="wormhole-vaa",
    version="0.1.0",
    python_requires=">=3.10",
    packages=find_packages(include=("wormhole_vaa", "wormhole_vaa.*")),
    license="MIT",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    package_data={"wormhole_vaa": ["py.typed"]},
    install_requires=[
        "pyteal>=0.20.0",
        "py-algorand-sdk>=1.16.1",
        "pycryptodomex>=3.15.0",
    ],
    extras_require={"test": ["pytest>=7.0"]},
)
