import pathlib

TEST_DATA_DIR = pathlib.Path(__file__).parent / 'data'
