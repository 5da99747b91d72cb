import os

from setuptools import setup


ver_path = os.path.join(os.path.dirname(__file__), 'pngme', 'version.py')
with open(ver_path) as ver_file:
    __version__ = ''
    exec(compile(ver_file.read(), ver_path, 'exec'))


requires = [
    'attrs>=19.2.0',
]

tests_require = [
    'pytest',
]

classifiers = [
    'Programming Language :: Python :: 3',
    'Environment :: Console',
    'Topic :: Multimedia :: Graphics',
]

setup(
    name='pngme',
    version=__version__,
    description='Hide, find and remove messages in PNG chunks',
    classifiers=classifiers,
    author='Colin Dunklau',
    author_email='colin.dunklau@gmail.com',
    url='',
    keywords='png chunk steganography',
    packages=['pngme', 'pngme.tests'],
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.6',
    install_requires=requires,
    extras_require={'test': tests_require},
    entry_points={'console_scripts': ['pngme = pngme.main:main']},
)
