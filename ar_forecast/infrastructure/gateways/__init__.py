from .csv_price_gateway import CsvPriceBarGateway

__all__ = ["CsvPriceBarGateway"]
