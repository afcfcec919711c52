"""Catalog read queries.

Listing queries always exclude soft-deleted products; fetch-by-id is
delete-transparent.
"""

from dataclasses import dataclass

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_core.catalog.dtos import CategoryDTO, ProductDTO, ProductSummaryDTO, VariantDTO
from catalog_core.catalog.models import Category, Product, Variant, fits_integer_column
from catalog_core.domain.exceptions import NotFoundError


@dataclass
class ProductFilter:
    """Filter parameters for product listing.

    Attributes:
        search: Substring matched against name or description.
        category_id: Exact category match.
    """

    search: str | None = None
    category_id: int | None = None


class CatalogReader:
    """Read-side queries for products, variants and categories.

    Example usage:
        async with database.session() as session:
            reader = CatalogReader(session)
            summaries = await reader.list_products(ProductFilter(search="tee"))
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize reader with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def list_products(self, filters: ProductFilter | None = None) -> list[ProductSummaryDTO]:
        """List live products with variant aggregates.

        Args:
            filters: Optional search / category filters, combined with AND.

        Returns:
            Summaries ordered most-recently-created first.
        """
        filters = filters or ProductFilter()
        if filters.category_id is not None and not fits_integer_column(filters.category_id):
            return []

        # Soft-delete predicate first; caller filters can only narrow it
        conditions = [Product.deleted_at.is_(None)]

        if filters.search:
            pattern = f"%{filters.search}%"
            conditions.append(
                or_(
                    Product.name.like(pattern),
                    Product.description.like(pattern),
                )
            )

        if filters.category_id is not None:
            conditions.append(Product.category_id == filters.category_id)

        query = (
            select(
                Product,
                Category.name.label("category_name"),
                func.count(Variant.id).label("variant_count"),
                func.min(Variant.price_cents).label("min_price_cents"),
                func.max(Variant.price_cents).label("max_price_cents"),
                func.coalesce(func.sum(Variant.inventory_count), 0).label("total_inventory"),
            )
            .outerjoin(Category, Product.category_id == Category.id)
            .outerjoin(Variant, Variant.product_id == Product.id)
            .where(and_(*conditions))
            .group_by(Product.id, Category.name)
            .order_by(Product.created_at.desc(), Product.id.desc())
            .execution_options(populate_existing=True)
        )

        result = await self.session.execute(query)
        return [
            ProductSummaryDTO(
                id=row.Product.id,
                name=row.Product.name,
                description=row.Product.description,
                category_id=row.Product.category_id,
                category_name=row.category_name,
                status=row.Product.status,
                deleted_at=row.Product.deleted_at,
                created_at=row.Product.created_at,
                updated_at=row.Product.updated_at,
                variant_count=row.variant_count,
                min_price_cents=row.min_price_cents,
                max_price_cents=row.max_price_cents,
                total_inventory=int(row.total_inventory),
            )
            for row in result.all()
        ]

    async def get_product_row(self, product_id: int) -> tuple[Product, str | None]:
        """Product row with its category name, soft-deleted or not.

        Raises:
            NotFoundError: If no product has this id.
        """
        if not fits_integer_column(product_id):
            raise NotFoundError("Product", product_id)
        query = (
            select(Product, Category.name)
            .outerjoin(Category, Product.category_id == Category.id)
            .where(Product.id == product_id)
            .execution_options(populate_existing=True)
        )
        row = (await self.session.execute(query)).first()
        if row is None:
            raise NotFoundError("Product", product_id)
        return row[0], row[1]

    async def get_product(self, product_id: int, include_variants: bool = True) -> ProductDTO:
        """Get a product by id, including soft-deleted ones.

        Args:
            product_id: Product id.
            include_variants: Whether to load the variant list.

        Returns:
            Product with category name and variants in creation order.

        Raises:
            NotFoundError: If no product has this id.
        """
        product, category_name = await self.get_product_row(product_id)
        variants = await self.list_variants(product_id) if include_variants else []
        return ProductDTO.from_model(product, category_name, variants)

    async def list_variants(self, product_id: int) -> list[VariantDTO]:
        """Variants of a product, oldest first."""
        query = (
            select(Variant)
            .where(Variant.product_id == product_id)
            .order_by(Variant.created_at.asc(), Variant.id.asc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return [VariantDTO.from_model(v) for v in result.scalars().all()]

    async def get_variant_row(self, variant_id: int) -> Variant:
        """Variant row by id.

        Raises:
            NotFoundError: If no variant has this id.
        """
        if not fits_integer_column(variant_id):
            raise NotFoundError("Variant", variant_id)
        variant = await self.session.get(Variant, variant_id, populate_existing=True)
        if variant is None:
            raise NotFoundError("Variant", variant_id)
        return variant

    async def get_variant(self, variant_id: int) -> VariantDTO:
        """Get a variant by id.

        Raises:
            NotFoundError: If no variant has this id.
        """
        return VariantDTO.from_model(await self.get_variant_row(variant_id))

    async def list_categories(self) -> list[CategoryDTO]:
        """Categories with counts of their live products, ordered by name."""
        query = (
            select(Category.id, Category.name, func.count(Product.id).label("product_count"))
            .outerjoin(
                Product,
                and_(Product.category_id == Category.id, Product.deleted_at.is_(None)),
            )
            .group_by(Category.id, Category.name)
            .order_by(Category.name)
        )
        result = await self.session.execute(query)
        return [
            CategoryDTO(id=row.id, name=row.name, product_count=row.product_count)
            for row in result.all()
        ]

    async def get_category(self, category_id: int) -> CategoryDTO:
        """Get a category by id.

        Raises:
            NotFoundError: If no category has this id.
        """
        if not fits_integer_column(category_id):
            raise NotFoundError("Category", category_id)
        category = await self.session.get(Category, category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return CategoryDTO(id=category.id, name=category.name)
