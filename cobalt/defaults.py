"""Built-in reference catalogs, served when the database has none and used for seeding."""

DEFAULT_WARNING_SYMBOLS = [
    {
        "id": "explosive",
        "name": "폭발성",
        "description": "폭발하거나 대량 폭발할 수 있음",
        "image_url": "/images/symbols/explosive.png",
        "category": "physical",
        "is_active": True,
    },
    {
        "id": "flammable",
        "name": "인화성",
        "description": "쉽게 불이 붙을 수 있음",
        "image_url": "/images/symbols/flammable.png",
        "category": "physical",
        "is_active": True,
    },
    {
        "id": "oxidizing",
        "name": "산화성",
        "description": "화재를 일으키거나 강화시킬 수 있음",
        "image_url": "/images/symbols/oxidizing.png",
        "category": "physical",
        "is_active": True,
    },
    {
        "id": "compressed_gas",
        "name": "고압가스",
        "description": "가압된 가스를 담고 있으며, 가열하면 폭발할 수 있음",
        "image_url": "/images/symbols/compressed_gas.png",
        "category": "physical",
        "is_active": True,
    },
    {
        "id": "corrosive",
        "name": "부식성",
        "description": "피부나 눈에 심각한 화상을 일으킬 수 있음",
        "image_url": "/images/symbols/corrosive.png",
        "category": "physical",
        "is_active": True,
    },
    {
        "id": "toxic",
        "name": "급성독성",
        "description": "삼키거나 흡입하면 생명에 위험할 수 있음",
        "image_url": "/images/symbols/toxic.png",
        "category": "health",
        "is_active": True,
    },
    {
        "id": "irritant",
        "name": "자극성",
        "description": "피부나 눈에 자극을 일으킬 수 있음",
        "image_url": "/images/symbols/irritant.png",
        "category": "health",
        "is_active": True,
    },
    {
        "id": "health_hazard",
        "name": "건강 유해성",
        "description": "호흡기, 생식기능 또는 기타 장기에 손상을 일으킬 수 있음",
        "image_url": "/images/symbols/health_hazard.png",
        "category": "health",
        "is_active": True,
    },
    {
        "id": "environmental",
        "name": "환경 유해성",
        "description": "수생생물에 유독하며 장기적 영향을 일으킬 수 있음",
        "image_url": "/images/symbols/environmental.png",
        "category": "environmental",
        "is_active": True,
    },
]

DEFAULT_PROTECTIVE_EQUIPMENT = [
    {
        "id": "safety_glasses",
        "name": "보안경",
        "description": "눈 보호를 위해 착용",
        "image_url": "/images/protective/safety_glasses.png",
        "category": "eye",
        "is_active": True,
    },
    {
        "id": "face_shield",
        "name": "안면보호구",
        "description": "안면 보호를 위해 착용",
        "image_url": "/images/protective/face_shield.png",
        "category": "eye",
        "is_active": True,
    },
    {
        "id": "gas_mask",
        "name": "방독마스크",
        "description": "유해 가스 차단을 위해 착용",
        "image_url": "/images/protective/gas_mask.png",
        "category": "respiratory",
        "is_active": True,
    },
    {
        "id": "dust_mask",
        "name": "방진마스크",
        "description": "분진 차단을 위해 착용",
        "image_url": "/images/protective/dust_mask.png",
        "category": "respiratory",
        "is_active": True,
    },
    {
        "id": "chemical_gloves",
        "name": "내화학장갑",
        "description": "화학물질로부터 손 보호를 위해 착용",
        "image_url": "/images/protective/chemical_gloves.png",
        "category": "hand",
        "is_active": True,
    },
    {
        "id": "heat_gloves",
        "name": "내열장갑",
        "description": "고온으로부터 손 보호를 위해 착용",
        "image_url": "/images/protective/heat_gloves.png",
        "category": "hand",
        "is_active": True,
    },
    {
        "id": "protective_suit",
        "name": "보호복",
        "description": "전신 보호를 위해 착용",
        "image_url": "/images/protective/protective_suit.png",
        "category": "body",
        "is_active": True,
    },
    {
        "id": "safety_shoes",
        "name": "안전화",
        "description": "발 보호를 위해 착용",
        "image_url": "/images/protective/safety_shoes.png",
        "category": "foot",
        "is_active": True,
    },
    # Legacy ids still referenced by older records
    {
        "id": "flammable",
        "name": "인화성 보호구",
        "description": "인화성 물질 취급 시 착용",
        "image_url": "/images/protective/flammable.png",
        "category": "body",
        "is_active": True,
    },
    {
        "id": "toxic",
        "name": "독성 보호구",
        "description": "독성 물질 취급 시 착용",
        "image_url": "/images/protective/toxic.png",
        "category": "respiratory",
        "is_active": True,
    },
    {
        "id": "corrosive",
        "name": "부식성 보호구",
        "description": "부식성 물질 취급 시 착용",
        "image_url": "/images/protective/corrosive.png",
        "category": "eye",
        "is_active": True,
    },
    {
        "id": "oxidizing",
        "name": "산화성 보호구",
        "description": "산화성 물질 취급 시 착용",
        "image_url": "/images/protective/oxidizing.png",
        "category": "hand",
        "is_active": True,
    },
]

DEFAULT_CONFIG_OPTIONS = [
    {"id": 1, "type": "usage", "value": "pure_reagent", "label": "순수시약", "is_active": True},
    {"id": 2, "type": "usage", "value": "nox_reduction", "label": "NOx저감", "is_active": True},
    {"id": 3, "type": "usage", "value": "wastewater_treatment", "label": "폐수처리", "is_active": True},
    {"id": 4, "type": "usage", "value": "boiler_water_treatment", "label": "보일러용수처리", "is_active": True},
    {"id": 5, "type": "reception", "value": "lng_3_cpp", "label": "LNG 3호기 CPP", "is_active": True},
    {"id": 6, "type": "reception", "value": "lng_4_cpp", "label": "LNG 4호기 CPP", "is_active": True},
    {"id": 7, "type": "reception", "value": "water_treatment", "label": "수처리동", "is_active": True},
    {"id": 8, "type": "reception", "value": "bio_2_scr", "label": "BIO 2호기 SCR", "is_active": True},
    {"id": 9, "type": "laws", "value": "chemical_safety", "label": "화학물질안전법", "is_active": True},
    {"id": 10, "type": "laws", "value": "industrial_safety", "label": "산업안전보건법", "is_active": True},
]
