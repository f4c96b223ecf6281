"""Reply texts and suggested-action sets for the command interpreter."""

from admin_assistant.agents.catalog_agent import AgentReply
from admin_assistant.conversation.models import (
    MessageKind,
    ProductDraft,
    ReplyDraft,
    SuggestedAction,
)
from admin_assistant.flows.image_analysis import ImageAnalysisResult
from admin_assistant.store import Product, StoreData

CATALOG_QUERY_PREFIX = "shopify:"

PLACEHOLDER_PRODUCT_IMAGE = "https://placehold.co/100x100.png?text=📦"

WELCOME_TEXT = (
    "Welcome to your AI-Commerce Command Center! I'm here to help you manage your store "
    "efficiently. How can I assist you today? You can also upload a product image for "
    "analysis or ask about your Shopify store (e.g., 'shopify: list my products')."
)

HELP_TEXT = (
    "I'm not sure how to help with that. You can ask me to:\n\n"
    "• Show dashboard/overview/stats\n"
    "• List/show products (mock data)\n"
    "• Add/create product (you can upload an image too!)\n"
    "• Show orders/sales (mock data)\n"
    "• Check urgent tasks (mock data)\n"
    "• Query Shopify: 'shopify: [your question]'\n\n"
    "How can I assist you?"
)

EMPTY_CATALOG_QUERY_TEXT = (
    "Please provide a query after 'shopify:'. For example, 'shopify: list my products'."
)

ADD_PRODUCT_FORM_TEXT = (
    "Let's add a new product. Please provide the product name, key features (comma "
    "separated), and desired tone for the description (e.g., "
    "'SuperWidget;eco-friendly,long-lasting;professional'). You can also upload an image "
    "first for AI assistance."
)

AI_DESCRIPTION_PROMPT_TEXT = (
    "Okay, let's use AI. Provide product name, key features (comma-separated), and tone. "
    "Format: 'ProductName; feature1, feature2; tone'"
)

DESCRIPTION_FAILED_TEXT = (
    "Sorry, I couldn't generate the description. Please try again or add manually."
)

IMAGE_ANALYSIS_FAILED_TEXT = "Sorry, I couldn't analyze the image. Please try again."

WELCOME_ACTIONS = (
    SuggestedAction(label="Show me my dashboard", action="show_dashboard"),
    SuggestedAction(label="List my products", action="show_products"),
    SuggestedAction(label="Any urgent tasks?", action="show_urgent_tasks"),
    SuggestedAction(label="Ask Shopify: List 3 products", action="ask_shopify_list_3_products"),
)

HELP_ACTIONS = (
    SuggestedAction(label="Show Dashboard", action="show_dashboard"),
    SuggestedAction(label="List Mock Products", action="show_products"),
    SuggestedAction(label="Ask Shopify: List products", action="ask_shopify_list_products"),
)

DASHBOARD_ACTIONS = (
    SuggestedAction(label="View Detailed Report", action="view_detailed_report", variant="outline"),
    SuggestedAction(label="Refresh Data", action="refresh_analytics_data", variant="outline"),
)

PRODUCT_LIST_ACTIONS = (
    SuggestedAction(label="Add New Product (Manual)", action="add_product_interactive", variant="outline"),
    SuggestedAction(label="Upload Image to Add", action="trigger_image_upload_for_product"),
    SuggestedAction(
        label="Ask Shopify: List products", action="ask_shopify_list_products", variant="secondary"
    ),
)

ADD_PRODUCT_FORM_ACTIONS = (
    SuggestedAction(label="Use AI for Description", action="ai_product_description_prompt"),
    SuggestedAction(
        label="Upload Image First", action="trigger_image_upload_for_product", variant="outline"
    ),
)

ORDERS_ACTIONS = (
    SuggestedAction(label="Filter Orders", action="filter_orders", variant="outline"),
    SuggestedAction(label="Process Pending", action="process_pending_orders"),
    SuggestedAction(
        label="Ask Shopify: List orders", action="ask_shopify_list_orders", variant="secondary"
    ),
)

URGENT_ACTIONS = (
    SuggestedAction(label="View Low Stock", action="view_low_stock", variant="outline"),
    SuggestedAction(label="View Pending Orders", action="view_pending_orders", variant="outline"),
)


def _add_to_store_action(product_name: str) -> SuggestedAction:
    return SuggestedAction(label=f'Add "{product_name}" to Store', action="add_product_from_context")


def help_reply() -> ReplyDraft:
    return ReplyDraft(kind=MessageKind.HELP, text=HELP_TEXT, suggested_actions=HELP_ACTIONS)


def empty_catalog_query_reply() -> ReplyDraft:
    return ReplyDraft(kind=MessageKind.HELP, text=EMPTY_CATALOG_QUERY_TEXT)


def agent_reply(reply: AgentReply) -> ReplyDraft:
    return ReplyDraft(
        kind=MessageKind.AGENT_RESPONSE,
        text=reply.response,
        payload={"error": reply.error_message} if reply.is_error else None,
    )


def dashboard_reply(store: StoreData) -> ReplyDraft:
    return ReplyDraft(
        kind=MessageKind.ANALYTICS_DASHBOARD,
        text="Here's your current performance overview:",
        payload={"analytics": store.analytics.model_dump(mode="json")},
        suggested_actions=DASHBOARD_ACTIONS,
    )


def product_list_reply(store: StoreData) -> ReplyDraft:
    return ReplyDraft(
        kind=MessageKind.PRODUCT_LIST,
        text="Here's your (mock) product catalog:",
        payload={"products": [p.model_dump(mode="json") for p in store.products]},
        suggested_actions=PRODUCT_LIST_ACTIONS,
    )


def add_product_form_reply() -> ReplyDraft:
    return ReplyDraft(
        kind=MessageKind.ADD_PRODUCT_FORM,
        text=ADD_PRODUCT_FORM_TEXT,
        suggested_actions=ADD_PRODUCT_FORM_ACTIONS,
    )


def ai_description_prompt_reply() -> ReplyDraft:
    return ReplyDraft(kind=MessageKind.ADD_PRODUCT_FORM, text=AI_DESCRIPTION_PROMPT_TEXT)


def orders_reply(store: StoreData) -> ReplyDraft:
    return ReplyDraft(
        kind=MessageKind.ORDERS_LIST,
        text="Here are your recent (mock) orders:",
        payload={"orders": [o.model_dump(mode="json") for o in store.orders]},
        suggested_actions=ORDERS_ACTIONS,
    )


def urgent_tasks_reply(store: StoreData) -> ReplyDraft:
    low_stock = store.low_stock_products()
    pending = store.pending_orders()
    if not low_stock and not pending:
        text = "Things look good! No immediate urgent tasks found in mock data."
    else:
        text = "Here are some items needing attention (from mock data):\n"
        if low_stock:
            text += (
                f"\n- {len(low_stock)} product(s) are low on stock "
                f"(e.g., {low_stock[0].name})."
            )
        if pending:
            text += (
                f"\n- You have {len(pending)} order(s) to process "
                f"(e.g., Order {pending[0].id})."
            )
    return ReplyDraft(kind=None, text=text, suggested_actions=URGENT_ACTIONS)


def image_analysis_reply(analysis: ImageAnalysisResult, image_data_uri: str) -> ReplyDraft:
    return ReplyDraft(
        kind=MessageKind.IMAGE_ANALYSIS_RESULT,
        text=(
            "I've analyzed the image! Here's what I found:\n"
            f"Category: {analysis.category}\n"
            f"Tags: {', '.join(analysis.tags)}\n"
            f'Initial description idea: "{analysis.initial_description}"\n\n'
            "What is the product name for this item?"
        ),
        payload={**analysis.model_dump(mode="json"), "original_image": image_data_uri},
    )


def confirm_product_name_reply(product_name: str, draft: ProductDraft) -> ReplyDraft:
    return ReplyDraft(
        kind=MessageKind.CONFIRM_PRODUCT_NAME,
        text=(
            f'OK, product name set to "{product_name}". Based on the image, I found:\n'
            f"Category: {draft.category or 'N/A'}\n"
            f"Tags: {', '.join(draft.tags)}\n"
            f'Initial Description: "{draft.initial_description or "N/A"}"\n\n'
            "What's next?"
        ),
        suggested_actions=(
            _add_to_store_action(product_name),
            SuggestedAction(
                label="Generate Full Description",
                action="request_features_for_description_context",
            ),
        ),
    )


def request_features_reply(product_name: str | None) -> ReplyDraft:
    return ReplyDraft(
        kind=MessageKind.REQUEST_FEATURES,
        text=(
            f'Sure! To generate a full description for "{product_name}", please provide some '
            "key features or keywords (comma-separated). You can also mention the tone if you "
            "have a preference."
        ),
    )


def draft_description_reply(product_name: str, description: str, draft: ProductDraft) -> ReplyDraft:
    """Description generated from features typed after an image-based draft."""
    return ReplyDraft(
        kind=MessageKind.DESCRIPTION_RESULT,
        text=(
            f'Generated full description for "{product_name}":\n\n{description}\n\n'
            "Ready to add it to the store?"
        ),
        payload={
            "product_name": product_name,
            "description": description,
            "context": draft.model_dump(mode="json"),
        },
        suggested_actions=(
            _add_to_store_action(product_name),
            SuggestedAction(
                label="Regenerate (new features?)",
                action="request_features_for_description_context",
            ),
        ),
    )


def manual_description_reply(product_name: str, description: str) -> ReplyDraft:
    """Description generated from a typed 'name; features; tone' line."""
    return ReplyDraft(
        kind=MessageKind.DESCRIPTION_RESULT,
        text=(
            f'Generated description for "{product_name}":\n\n{description}\n\n'
            "What's next? You can add this product to the store (it will use default price/SKU)."
        ),
        payload={"product_name": product_name, "description": description},
        suggested_actions=(_add_to_store_action(product_name),),
    )


def error_reply(text: str) -> ReplyDraft:
    return ReplyDraft(kind=MessageKind.ERROR, text=text)


def product_added_reply(product: Product) -> ReplyDraft:
    return ReplyDraft(
        kind=MessageKind.PRODUCT_ADDED_CONFIRMATION,
        text=(
            f'Great! "{product.name}" has been added to your store with basic details. '
            "You can view it in the Products section or ask me to edit it."
        ),
        payload={"product": product.model_dump(mode="json")},
        suggested_actions=(
            SuggestedAction(label="View Products", action="show_products"),
            SuggestedAction(label=f"Edit {product.name}", action=f"edit_product_{product.id}"),
        ),
    )
