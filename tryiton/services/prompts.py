from types import MappingProxyType


_UPPER = "upper body clothing (shirt/top area)"

BODY_AREAS = MappingProxyType({
    "shirt": _UPPER,
    "blouse": _UPPER,
    "t-shirt": _UPPER,
    "top": _UPPER,
    "jacket": "upper body clothing (jacket/outer layer - wear over existing clothing)",
    "coat": "upper body clothing (coat/outerwear - wear over all existing layers)",
    "sweater": "upper body clothing (sweater/outer layer - wear over existing top)",
    "hoodie": "upper body clothing (hoodie/outer layer - wear over existing clothing)",
    "dress": "full body clothing (dress/full outfit)",
    "pants": "lower body clothing (pants/trousers area)",
    "jeans": "lower body clothing (jeans/pants area)",
    "shorts": "lower body clothing (shorts/lower body area)",
    "bag": "accessory (handbag/purse - position OVER existing clothing, maintain strap and bag shape)",
    "purse": "accessory (purse/handbag - position OVER existing clothing, keep original proportions)",
    "handbag": "accessory (handbag - wear OVER existing outfit, maintain handle/strap positioning)",
    "shoes": "footwear (shoes - position on feet, maintain existing pant/dress length)",
    "sneakers": "footwear (sneakers - position on feet, keep existing lower clothing visible)",
})

GENERIC_AREA = "clothing item (analyze the garment and apply it to the appropriate body area)"


def map_product_type(product_type: str | None) -> str:
    """Translate a free-text product category into the body area the garment covers.

    Unknown categories fall back to a generic phrase that still names the category.
    """
    if not product_type or not product_type.strip():
        return GENERIC_AREA
    return BODY_AREAS.get(product_type.strip().lower(), f'clothing item labeled as "{product_type}"')


def build_prompt(product_type: str | None = None, product_title: str | None = None) -> str:
    focus_area = map_product_type(product_type)
    title = product_title or "clothing item"
    return f"""VIRTUAL TRY-ON REQUEST: Generate a photorealistic image where the person in IMAGE 1 is wearing or holding the product from IMAGE 2.

CORE TASK:
- Overlay/replace the {focus_area} area with the product from IMAGE 2.
- Preserve the person's identity, face, hairstyle, body proportions, and original background from IMAGE 1.
- Ensure the product maintains its true design, structure, and intended appearance.

QUALITY & REALISM REQUIREMENTS:
- Ultra-photorealistic rendering with seamless blending
- Preserve natural shadows, highlights, and lighting direction from IMAGE 1
- Maintain fabric texture, stitching, logos, patterns, and material shine from IMAGE 2
- Match photo resolution and composition with no visible editing artifacts
- Ensure realistic perspective, scale, and alignment of product with body posture

SIZING & FIT LOGIC:
- Adapt product size proportionally to match the person's body dimensions
- Retain correct garment proportions (length, sleeve size, neckline, hemline, waistband)
- Ensure realistic fabric draping that respects body curves and pose

TECHNICAL INSTRUCTIONS:
- Focus Area: {focus_area}
- Product: "{title}" ({product_type or "unspecified"})
- Retain original fabric folds, seams, and structural details
- Preserve both the person's natural features and the product's intended design

OUTPUT SPECIFICATIONS:
- Deliver one high-resolution try-on result
- The person from IMAGE 1 must remain fully recognizable
- The product from IMAGE 2 must be faithfully represented in size, shape, and detail
- Result should look indistinguishable from a real photograph"""
