import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

requirements = []
with open("requirements.txt", "r") as fh:
    for line in fh:
        line = line.strip()
        if line and not line.startswith("#"):
            requirements.append(line)

setuptools.setup(
    name="simplehttp",
    version="0.1.0",
    description="minimal HTTP/1.1 request parser and response builder",
    license="MIT",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
    ],
    keywords="http server parser",
    packages=["simplehttp"],
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "simplehttp=simplehttp.cli:main",
            "simplehttp-client=simplehttp.cli:client_main",
        ],
    },
    install_requires=requirements,
)
