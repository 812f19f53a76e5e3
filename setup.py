#!/usr/bin/env python

from itertools import chain
import os
from fnmatch import fnmatch

from setuptools import setup


def ispackage(x):
    return os.path.isdir(x) and os.path.exists(os.path.join(x, '__init__.py'))


def find_packages(where='facet', exclude=('*__pycache__*',),
                  predicate=ispackage):
    func = lambda x: predicate(x) and not any(fnmatch(x, exc)
                                              for exc in exclude)
    return [x[0].replace(os.sep, '.')
            for x in os.walk(where) if func(x[0])]


packages = find_packages()


def read(filename):
    with open(filename, 'r') as f:
        return f.read()


def read_reqs(filename):
    return read(filename).strip().splitlines()


def install_requires():
    return read_reqs('etc/requirements.txt')


def extras_require():
    extras = {req: read_reqs('etc/requirements_%s.txt' % req)
              for req in {'test'}}

    # don't include the 'test' target in 'all'
    extras['all'] = list(chain.from_iterable(v for k, v in extras.items()
                                             if k != 'test'))
    return extras


if __name__ == '__main__':
    setup(name='facet',
          version='0.3.0',
          description='Selection, grouping and sub-frame views over '
                      'columnar tables',
          long_description=read('README.rst'),
          install_requires=install_requires(),
          extras_require=extras_require(),
          python_requires='>=3.8',
          license='BSD',
          classifiers=['Development Status :: 3 - Alpha',
                       'Intended Audience :: Developers',
                       'Intended Audience :: Science/Research',
                       'License :: OSI Approved :: BSD License',
                       'Operating System :: OS Independent',
                       'Programming Language :: Python :: 3',
                       'Topic :: Scientific/Engineering',
                       'Topic :: Utilities'],
          packages=packages)
