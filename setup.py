from setuptools import setup, find_packages

setup(
    name="sakpro",
    version="0.1.0",
    author="Tidsskriftet Sakprosa",
    packages=find_packages(exclude=["tests"]),
    package_dir={"sakpro": "sakpro"},
    include_package_data=True,
    install_requires=[
        # When you use this in production, pin the dependencies!
        "servicelayer",
        "beautifulsoup4>=4.13.4",
        "click>=8.2.1",
    ],
    extras_require={
        "test": ["pytest"],
    },
    license="MIT",
    zip_safe=False,
    python_requires=">=3.10",
    test_suite="tests",
    tests_require=["pytest"],
    entry_points={
        "console_scripts": ["sakpro = sakpro.cli:cli"],
    },
)
