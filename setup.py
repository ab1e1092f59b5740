#!/usr/bin/env python
import os
import sys
import subprocess

from setuptools import setup, find_packages
from setuptools.command.install import install

VERSION = '0.3.1'

class VerifyVersionCommand(install):
    """Custom command to verify that the git tag matches our version"""
    description = 'verify that the git tag matches our version'

    def run(self):
        tag = os.getenv('ASPUB_RELEASE_TAG', '')
        tag = tag.lstrip('v')

        if tag != VERSION:
            info = f"Git tag: {tag} does not match the version of this app: {VERSION}"
            sys.exit(info)

class ReplaceCommitVersion(install):
    description = 'Replace the embedded commit information with our current git commit'
    def run(self):
        try:
            ret = subprocess.run(['git', 'rev-parse', 'HEAD'],
                                 capture_output=True,
                                 timeout=15,
                                 check=False,
                                 text=True,
                                 )
        except Exception as e:
            print(f'Error grabbing commit: {e}')
            return 1
        else:
            commit = ret.stdout.strip()
        fp = './aspub/lib/version.py'
        with open(fp, 'rb') as fd:
            buf = fd.read()
        content = buf.decode()
        new_content = content.replace("commit = ''", f"commit = '{commit}'")
        if content == new_content:
            print(f'Unable to insert commit into {fp}')
            return 1
        with open(fp, 'wb') as fd:
            _ = fd.write(new_content.encode())
        print(f'Inserted commit {commit} into {fp}')
        return 0

setup(
    name='aspub',
    version=VERSION,
    description='Activity Streams entity graph with a polymorphic JSON codec.',
    python_requires='>=3.10',
    packages=find_packages(include=('aspub', 'aspub.*')),
    install_requires=[
        'yyjson>=4.0.0,<5.0.0',
        'regex>=2022.9.11',
        'PyYAML>=5.4,<7.0',
        'fastjsonschema>=2.18.0,<2.22.0',
        'pytz>=2023.3',
        'python-dateutil>=2.8,<3.0',
    ],
    extras_require={
        'dev': [
            'pytest>=7.2.0,<9.0.0',
        ],
    },
    cmdclass={
        'verify': VerifyVersionCommand,
        'setcommit': ReplaceCommitVersion,
    },
)
