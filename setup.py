#!/usr/bin/env python

from setuptools import setup, find_packages

setup(name='hang_profile_summarizer',
      version='0.1',
      description='Categorizes and summarizes the hang time of Firefox background hang profiles.',
      author='Doug Thayer',
      author_email='dothayer@mozilla.com',
      url='https://github.com/squarewave/background-hang-reporter-job',
      packages=find_packages(exclude=['tests']),
      install_requires=[
        'boto3',
        'ujson',
      ],
      extras_require={
        'test': ['pytest'],
      }
)
