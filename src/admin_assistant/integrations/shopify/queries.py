"""GraphQL documents for the Shopify Admin API."""

SHOP_INFO_QUERY = """
query {
  shop {
    name
    email
  }
}
"""

LIST_PRODUCTS_QUERY = """
query listProducts($first: Int!) {
  products(first: $first, sortKey: TITLE, reverse: false) {
    edges {
      node {
        id
        title
        status
        totalInventory
        vendor
        onlineStoreUrl
        featuredImage {
          url
        }
      }
    }
  }
}
"""

GET_PRODUCT_QUERY = """
query getProductById($id: ID!) {
  product(id: $id) {
    id
    title
    descriptionHtml
    status
    totalInventory
    vendor
    onlineStoreUrl
    priceRangeV2 {
      minVariantPrice {
        amount
        currencyCode
      }
      maxVariantPrice {
        amount
        currencyCode
      }
    }
    images(first: 1) {
      edges {
        node {
          url
        }
      }
    }
  }
}
"""
