from dataclasses import dataclass

from src.catalog_api.entities.service.product import ProductStore
from src.catalog_api.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    config: ConfigData
    product_store: ProductStore
