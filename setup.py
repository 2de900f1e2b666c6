from setuptools import setup, find_packages
import re

# Read version from gwcli/__init__.py
with open('gwcli/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='gwcli',
    version=version,
    packages=find_packages(include=['gwcli', 'gwcli.*']),
    python_requires='>=3.8',
    install_requires=[
        'google-api-python-client',
        'google-auth',
        'google-auth-oauthlib',
        'httplib2',
        'python-dotenv',
        'click>=8.0',
        'PyYAML',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'gwcli=gwcli.cli.__main__:main',
        ],
    },
    author='CLI Developer',
    description='Google Workspace command-line client for Gmail, Docs and Drive, with markdown writing for Google Docs.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
)
