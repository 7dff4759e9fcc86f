"""
Canned advice used when the chat model cannot be reached.

These responses carry no citations; they are general guidance for Nigerian
smallholders in each supported language.
"""

REGIONAL_KEYWORDS = ("kaduna", "kano", "sokoto", "northern")

REGIONAL_CROP_RESPONSES = {
    "english": """For crop selection, here are recommendations by Nigerian region:

**Northern Nigeria (Kaduna, Kano, Sokoto):**
Best crops: Sorghum, millet, maize, groundnuts, cotton, tomatoes, onions, pepper
- Plant at start of rainy season (May-June)
- Requires good drainage and moderate irrigation
- Consider soil testing before planting

**Middle Belt (Benue, Plateau, Nasarawa):**
Best crops: Yams, cassava, rice, sesame, soybeans, sweet potatoes
- Longer growing season
- Mix of grain and tuber crops
- Good for crop rotation systems

**Southern Nigeria (Lagos, Ogun, Rivers):**
Best crops: Cassava, plantain, oil palm, cocoa, vegetables, maize
- Year-round planting possible
- High rainfall, focus on drainage
- Ideal for tree crops

**General Tips:**
1. Start with soil testing (N-P-K levels, pH)
2. Choose drought-resistant varieties for northern regions
3. Practice crop rotation to maintain soil health
4. Use organic matter to improve soil structure
5. Plan planting around rainy season timing""",
    "hausa": """Don zaɓin amfanin gona, ga shawarwari bisa ga yankunan Najeriya:

**Arewacin Najeriya (Kaduna, Kano, Sokoto):**
Mafi kyawun amfanin gona: Dawa, gero, masara, gyada, auduga, tumatir
- Shuka a farkon damina (Mayu-Yuni)
- Yana buƙatar kyakkyawan magudanar ruwa
- Yi gwajin ƙasa kafin shuka

**Tsakiyar Belt (Benue, Plateau):**
Mafi kyawun amfanin gona: Doya, rogo, shinkafa, wake

**Kudancin Najeriya:**
Mafi kyawun amfanin gona: Rogo, ayaba, dabino, koko, kayan lambu""",
    "yoruba": """Fun yiyan irugbin, eyi ni awọn imọran nipasẹ agbegbe Naijiria:

**Ariwa Naijiria (Kaduna, Kano, Sokoto):**
Awọn irugbin ti o dara julọ: Ọka guinea, ọka, agbado, epa, owu, tomati
- Gbin ni ibẹrẹ akoko ojo (Karun-Osu)

**Agbegbe Aarin (Benue, Plateau):**
Awọn irugbin ti o dara julọ: Isu, ege, iresi, sesame, ẹwa soya

**Guusu Naijiria:**
Awọn irugbin ti o dara julọ: Ege, ọgẹdẹ, ọpẹ, koko, ẹfọ""",
    "igbo": """Maka nhọrọ ihe ọkụkụ, nke a bụ ndụmọdụ site na mpaghara Naịjirịa:

**Ugwu Naịjirịa (Kaduna, Kano, Sokoto):**
Ihe ọkụkụ kacha mma: Ọka guinea, millet, ọka, ahụekere, owu, tomato
- Kụọ na mmalite oge mmiri ozuzo (Mee-Jun)

**Middle Belt (Benue, Plateau):**
Ihe ọkụkụ kacha mma: Ji, akpụ, osikapa, sesame, soy

**Ndịda Naịjirịa:**
Ihe ọkụkụ kacha mma: Akpụ, ojoko, nkwụ, koko, akwụkwọ nri""",
}

GENERIC_RESPONSES = {
    "english": """Thank you for your question about farming! Here's some general guidance:

**Soil Health:**
- Test your soil every 6-12 months for N-P-K levels and pH
- Target pH: 6.0-7.0 for most crops
- Add organic matter (compost, manure) to improve structure
- Practice crop rotation to prevent nutrient depletion

**Water Management:**
- Most crops need 25-50mm of water per week
- Water early morning to reduce evaporation
- Use mulch to retain soil moisture

**Pest & Disease Control:**
- Inspect crops regularly (2-3 times per week)
- Remove infected plants immediately
- Use neem oil or soap solution for organic control

**Fertilizer Application:**
- Apply basal fertilizer 2 weeks before planting
- First top dressing at 3-4 weeks after planting
- Use organic alternatives: compost, poultry manure, green manure

Would you like more specific information about any of these topics?""",
    "hausa": """Na gode da tambayar ku game da aikin noma! Ga cikakken jagora:

**Lafiyar Ƙasa:**
- Gwada ƙasarka kowane wata 6-12
- Ƙara kwayoyin halitta (takin zamani)
- Yi musayar amfanin gona

**Kula da Ruwa:**
- Yawancin amfanin gona suna buƙatar ruwa 25-50mm a mako
- Yi ban ruwa da safe don rage ƙafewa

**Kare Cututtuka:**
- Duba amfanin gona akai-akai
- Cire tsire-tsiren da suka kamu da cuta
- Yi amfani da man neem""",
    "yoruba": """O ṣeun fun ibeere rẹ nipa ogbin! Eyi ni itọsọna pipe:

**Ilera Ile:**
- Ṣe idanwo ile rẹ ni gbogbo oṣu 6-12
- Ṣafikun ohun alumọni
- Ṣe iyipada ọgbin

**Iṣakoso Omi:**
- Pupọ julọ awọn ọgbin nilo 25-50mm omi fun ọsẹ
- Fi omi ni kutukutu owurọ

**Iṣakoso Kokoro:**
- Ṣayẹwo awọn ọgbin nigbagbogbo
- Lo epo neem""",
    "igbo": """Daalụ maka ajụjụ gị gbasara ọrụ ugbo! Nke a bụ nduzi zuru oke:

**Ahụike Ala:**
- Nwalee ala gị kwa ọnwa 6-12
- Tinye ihe organic
- Mee mgbanwe ihe ọkụkụ

**Njikwa Mmiri:**
- Ọtụtụ ihe ọkụkụ chọrọ 25-50mm mmiri kwa izu
- Gbanye mmiri n'isi ụtụtụ

**Njikwa Ụmụ Ahụhụ:**
- Nyochaa ihe ọkụkụ mgbe niile
- Jiri mmanụ neem""",
}


def is_regional_crop_question(message: str) -> bool:
    text = message.lower()
    if any(keyword in text for keyword in REGIONAL_KEYWORDS):
        return True
    return "crop" in text and "plant" in text


def fallback_response(message: str, language: str | None) -> str:
    """Pick canned advice for a message when no model answer is available."""
    language = (language or "").strip().lower()
    responses = (
        REGIONAL_CROP_RESPONSES
        if is_regional_crop_question(message)
        else GENERIC_RESPONSES
    )
    return responses.get(language, responses["english"])
