import os
import sys

from tabulary import DataKind, read_csv

DEFAULT_FILE = os.path.join(os.path.dirname(__file__), "data", "sales.csv")

sales = read_csv(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_FILE)
sales.convert(["Quantity"], DataKind.INTEGER)
sales.convert(["Price"], DataKind.FLOAT)
sales.add_column(
    "Total", [q * p if q is not None else None for q, p in zip(sales.select("Quantity"), sales.select("Price"))]
)

laptops = sales.select_rows([p == "Laptop" for p in sales.select("Product")])
laptops.disp(limit=5)
laptops.to_csv("laptops.csv")
