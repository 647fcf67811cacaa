from .csv_file import load_csv
from .socrata import SocrataClient, fetch_into, merge_rows

__all__ = ["SocrataClient", "fetch_into", "load_csv", "merge_rows"]
