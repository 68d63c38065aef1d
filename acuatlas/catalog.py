# acuatlas/catalog.py
"""
Point Catalog
=============
Built-in baseline shown whenever no query is active. Built once at import
time and never mutated: `CATALOG` is a tuple of frozen `Point` models and
`MERIDIANS` a tuple of frozen descriptors.

The lung channel ships with a fixed illustration (`LUNG_CHANNEL_IMAGE`), so
its points never hit the image service.
"""
from acuatlas.models import MeridianCode, MeridianDescriptor, Point

LUNG_CHANNEL_IMAGE = "/static/lung-channel.svg"


# ════════════════════════════════════════════════════════════════════════════
#  Meridians - code, display name, colour tag
# ════════════════════════════════════════════════════════════════════════════
MERIDIANS: tuple[MeridianDescriptor, ...] = tuple(
    MeridianDescriptor(code=code, name=name, color=color)
    for code, name, color in [
        (MeridianCode.LU, "Pulmón (LU)", "#60a5fa"),
        (MeridianCode.LI, "Intestino Grueso (LI)", "#94a3b8"),
        (MeridianCode.ST, "Estómago (ST)", "#f59e0b"),
        (MeridianCode.SP, "Bazo (SP)", "#eab308"),
        (MeridianCode.HT, "Corazón (HT)", "#ef4444"),
        (MeridianCode.SI, "Intestino Delgado (SI)", "#f97316"),
        (MeridianCode.BL, "Vejiga (BL)", "#3b82f6"),
        (MeridianCode.KI, "Riñón (KI)", "#1e3a8a"),
        (MeridianCode.PC, "Pericardio (PC)", "#db2777"),
        (MeridianCode.SJ, "San Jiao (SJ)", "#a855f7"),
        (MeridianCode.GB, "Vesícula Biliar (GB)", "#22c55e"),
        (MeridianCode.LR, "Hígado (LR)", "#15803d"),
        (MeridianCode.GV, "Du Mai (GV)", "#475569"),
        (MeridianCode.CV, "Ren Mai (CV)", "#0d9488"),
    ]
)

MERIDIAN_CODES: frozenset[str] = frozenset(m.code.value for m in MERIDIANS)


def meridian_info(code: str | None) -> MeridianDescriptor | None:
    for m in MERIDIANS:
        if m.code.value == code:
            return m
    return None


_LU_NAME = "Pulmón - Shou Tai Yin"


def _lung(pid, name, pinyin, location, indications, contraindications,
          applications, benefits, techniques, observations, category=None):
    return Point(
        id=pid, name=name, pinyin=pinyin,
        meridian="LU", meridian_name=_LU_NAME,
        location=location,
        indications=indications, contraindications=contraindications,
        applications=applications, benefits=benefits,
        techniques=techniques, observations=observations,
        category=category, static_image=LUNG_CHANNEL_IMAGE,
    )


# ════════════════════════════════════════════════════════════════════════════
#  Lung channel (full)
# ════════════════════════════════════════════════════════════════════════════
_LUNG_POINTS = [
    _lung(
        "LU1", "Residencia Central", "Zhongfu",
        "En la cara anterolateral del tórax, 6 cun lateral a la línea media, "
        "a nivel del primer espacio intercostal.",
        ["Tos", "Asma", "Dolor torácico", "Plenitud en el pecho"],
        ["Inserción perpendicular profunda (riesgo de neumotórax)"],
        "Patologías respiratorias agudas y crónicas con opresión torácica.",
        "Dispersa el Qi del pulmón, regula el Qi del Jiao superior y detiene la tos.",
        "Inserción oblicua lateral 0.5-0.8 cun. Moxibustión permitida.",
        "Punto Mu del pulmón. Palpación dolorosa en afecciones pulmonares.",
        category="Mu",
    ),
    _lung(
        "LU2", "Puerta de las Nubes", "Yunmen",
        "En la depresión bajo el extremo acromial de la clavícula, 6 cun lateral a la línea media.",
        ["Tos", "Asma", "Dolor de hombro"],
        ["Inserción profunda hacia el tórax"],
        "Tos con dolor referido al hombro y al brazo.",
        "Dispersa el calor del pulmón y alivia la plenitud torácica.",
        "Inserción oblicua lateral 0.5-0.8 cun.",
        "Útil en la tos con limitación de la abducción del hombro.",
    ),
    _lung(
        "LU3", "Palacio Celeste", "Tianfu",
        "En la cara anterolateral del brazo, 3 cun bajo el pliegue axilar anterior, "
        "en el borde radial del bíceps braquial.",
        ["Asma", "Epistaxis", "Dolor del brazo", "Tristeza"],
        [],
        "Epistaxis y trastornos emocionales relacionados con el pulmón.",
        "Enfría la sangre, desciende el Qi del pulmón y calma el Po.",
        "Inserción perpendicular 0.5-1 cun.",
        "Punto Ventana del Cielo.",
    ),
    _lung(
        "LU4", "Blanco Valiente", "Xiabai",
        "En la cara anterolateral del brazo, 4 cun bajo el pliegue axilar anterior, "
        "en el borde radial del bíceps braquial.",
        ["Tos", "Disnea", "Dolor precordial"],
        [],
        "Tos con disnea y opresión torácica.",
        "Regula el Qi y la sangre del tórax.",
        "Inserción perpendicular 0.5-1 cun.",
        "Sin observaciones adicionales.",
    ),
    _lung(
        "LU5", "Estanque del Codo", "Chize",
        "En el pliegue del codo, en el lado radial del tendón del bíceps braquial.",
        ["Tos con flema", "Fiebre", "Dolor de garganta", "Dolor del codo"],
        ["Sangrado en pacientes con trastornos de coagulación"],
        "Tos productiva, calor en el pulmón y afecciones del codo.",
        "Elimina el calor del pulmón, desciende el Qi rebelde y transforma la flema.",
        "Inserción perpendicular 0.8-1.2 cun o sangría.",
        "Punto He-Mar (agua) del meridiano; punto de sedación.",
        category="He-Mar",
    ),
    _lung(
        "LU6", "Máxima Abertura", "Kongzui",
        "En la cara anterior del antebrazo, 7 cun sobre el pliegue de la muñeca, "
        "en la línea entre LU5 y LU9.",
        ["Hemoptisis", "Tos aguda", "Afonía", "Hemorroides"],
        [],
        "Tos aguda y hemoptisis.",
        "Detiene el sangrado, desciende el Qi del pulmón y humedece el pulmón.",
        "Inserción perpendicular 0.5-1 cun.",
        "Punto Xi-Hendidura; indicado en cuadros agudos.",
        category="Xi",
    ),
    _lung(
        "LU7", "Secuencia Interrumpida", "Lieque",
        "Sobre la apófisis estiloides del radio, 1.5 cun sobre el pliegue de la muñeca, "
        "entre los tendones del braquiorradial y del abductor largo del pulgar.",
        ["Tos", "Cefalea", "Rigidez de nuca", "Resfriado común", "Congestión nasal"],
        ["Embarazo (precaución)"],
        "Síndromes de viento exterior, cefaleas y rigidez cervical.",
        "Libera el exterior, dispersa el viento y abre el Ren Mai.",
        "Inserción oblicua proximal 0.3-0.5 cun.",
        "Punto Luo y punto de apertura del Ren Mai. Punto comando de cabeza y nuca.",
        category="Luo",
    ),
    _lung(
        "LU8", "Canal del Meridiano", "Jingqu",
        "En la cara anterior del antebrazo, 1 cun sobre el pliegue de la muñeca, "
        "en el lado radial de la arteria radial.",
        ["Tos", "Asma", "Dolor de garganta", "Dolor de muñeca"],
        ["Moxibustión directa", "Punción de la arteria radial"],
        "Tos y asma con dolor de garganta.",
        "Desciende el Qi del pulmón y detiene la tos.",
        "Inserción perpendicular u oblicua 0.3-0.5 cun evitando la arteria.",
        "Punto Jing-Río (metal).",
        category="Jing-Río",
    ),
    _lung(
        "LU9", "Gran Abismo", "Taiyuan",
        "En el pliegue de la muñeca, en el lado radial de la arteria radial.",
        ["Tos crónica", "Asma", "Palpitaciones", "Pulso débil"],
        ["Punción de la arteria radial"],
        "Deficiencia crónica de Qi y Yin del pulmón.",
        "Tonifica el pulmón, transforma la flema y promueve la circulación en los vasos.",
        "Inserción perpendicular 0.3-0.5 cun evitando la arteria.",
        "Punto Yuan-Fuente y Shu-Arroyo; punto de reunión de los vasos.",
        category="Yuan",
    ),
    _lung(
        "LU10", "Borde del Pez", "Yuji",
        "En la eminencia tenar, en el punto medio del primer metacarpiano, "
        "en la unión de piel roja y blanca.",
        ["Dolor de garganta", "Afonía", "Fiebre", "Tos con sangre"],
        [],
        "Afecciones agudas de garganta y voz.",
        "Elimina el calor del pulmón y beneficia la garganta.",
        "Inserción perpendicular 0.5-0.8 cun.",
        "Punto Ying-Manantial (fuego).",
        category="Ying",
    ),
    _lung(
        "LU11", "Pequeño Shang", "Shaoshang",
        "En el lado radial del pulgar, 0.1 cun desde la esquina de la uña.",
        ["Dolor de garganta agudo", "Fiebre alta", "Pérdida de consciencia"],
        ["Pacientes anticoagulados"],
        "Faringitis aguda y cuadros febriles; urgencias.",
        "Elimina el calor, beneficia la garganta y restaura la consciencia.",
        "Inserción superficial 0.1 cun o sangría.",
        "Punto Jing-Pozo (madera).",
        category="Jing-Pozo",
    ),
]


# ════════════════════════════════════════════════════════════════════════════
#  Key points of the other channels
# ════════════════════════════════════════════════════════════════════════════
_OTHER_POINTS = [
    Point(
        id="LI4", name="Unión de los Valles", pinyin="Hegu",
        meridian="LI", meridian_name="Intestino Grueso - Shou Yang Ming",
        location="En el dorso de la mano, entre el primer y segundo metacarpiano, "
                 "en el punto medio del segundo metacarpiano por el lado radial.",
        indications=["Cefalea", "Dolor dental", "Resfriado", "Dolor facial", "Estreñimiento"],
        contraindications=["Embarazo"],
        applications="Analgesia general, especialmente de cara y cabeza.",
        benefits="Libera el exterior, dispersa el viento y calma el dolor.",
        techniques="Inserción perpendicular 0.5-1 cun.",
        observations="Punto Yuan-Fuente. Combinado con LR3 forma las Cuatro Puertas.",
        category="Yuan",
    ),
    Point(
        id="LI11", name="Estanque Curvo", pinyin="Quchi",
        meridian="LI", meridian_name="Intestino Grueso - Shou Yang Ming",
        location="Con el codo flexionado, en el extremo lateral del pliegue del codo.",
        indications=["Fiebre", "Urticaria", "Hipertensión", "Dolor del codo"],
        contraindications=[],
        applications="Síndromes de calor y afecciones cutáneas.",
        benefits="Elimina el calor, enfría la sangre y expulsa el viento.",
        techniques="Inserción perpendicular 1-1.5 cun.",
        observations="Punto He-Mar (tierra).",
        category="He-Mar",
    ),
    Point(
        id="ST36", name="Tres Millas del Pie", pinyin="Zusanli",
        meridian="ST", meridian_name="Estómago - Zu Yang Ming",
        location="3 cun bajo ST35, un dedo lateral a la cresta anterior de la tibia.",
        indications=["Fatiga", "Dispepsia", "Náuseas", "Distensión abdominal", "Inmunidad baja"],
        contraindications=[],
        applications="Tonificación general y trastornos digestivos.",
        benefits="Tonifica el Qi y la sangre, armoniza el estómago y fortalece el bazo.",
        techniques="Inserción perpendicular 1-1.5 cun. Moxibustión muy indicada.",
        observations="Punto He-Mar (tierra). Uno de los puntos más tonificantes del cuerpo.",
        category="He-Mar",
    ),
    Point(
        id="SP6", name="Reunión de los Tres Yin", pinyin="Sanyinjiao",
        meridian="SP", meridian_name="Bazo - Zu Tai Yin",
        location="3 cun sobre el maléolo medial, detrás del borde posterior de la tibia.",
        indications=["Dismenorrea", "Insomnio", "Digestión lenta", "Edema"],
        contraindications=["Embarazo"],
        applications="Trastornos ginecológicos, digestivos y del sueño.",
        benefits="Tonifica bazo y riñón, nutre la sangre y el Yin, calma la mente.",
        techniques="Inserción perpendicular 1-1.5 cun.",
        observations="Cruce de los tres meridianos Yin de la pierna.",
    ),
    Point(
        id="HT7", name="Puerta del Espíritu", pinyin="Shenmen",
        meridian="HT", meridian_name="Corazón - Shou Shao Yin",
        location="En el pliegue de la muñeca, en el lado radial del tendón del flexor cubital del carpo.",
        indications=["Insomnio", "Ansiedad", "Palpitaciones", "Pérdida de memoria"],
        contraindications=[],
        applications="Trastornos emocionales y del sueño.",
        benefits="Calma el Shen y nutre la sangre del corazón.",
        techniques="Inserción perpendicular 0.3-0.5 cun.",
        observations="Punto Yuan-Fuente y Shu-Arroyo.",
        category="Yuan",
    ),
    Point(
        id="SI3", name="Arroyo Posterior", pinyin="Houxi",
        meridian="SI", meridian_name="Intestino Delgado - Shou Tai Yang",
        location="Con el puño cerrado, en el extremo cubital del pliegue palmar distal, "
                 "proximal a la quinta articulación metacarpofalángica.",
        indications=["Rigidez de nuca", "Lumbalgia aguda", "Cefalea occipital"],
        contraindications=[],
        applications="Afecciones agudas de columna y nuca.",
        benefits="Abre el Du Mai y relaja los tendones.",
        techniques="Inserción perpendicular 0.5-1 cun.",
        observations="Punto de apertura del Du Mai.",
    ),
    Point(
        id="BL40", name="Centro del Pliegue", pinyin="Weizhong",
        meridian="BL", meridian_name="Vejiga - Zu Tai Yang",
        location="En el punto medio del pliegue poplíteo.",
        indications=["Lumbalgia", "Ciática", "Eccema", "Dolor de rodilla"],
        contraindications=["Varices en la zona", "Punción de la arteria poplítea"],
        applications="Dolor lumbar y de miembros inferiores.",
        benefits="Relaja los tendones, elimina el calor y enfría la sangre.",
        techniques="Inserción perpendicular 0.5-1 cun o sangría de vénulas.",
        observations="Punto comando de la espalda.",
        category="He-Mar",
    ),
    Point(
        id="KI3", name="Gran Arroyo", pinyin="Taixi",
        meridian="KI", meridian_name="Riñón - Zu Shao Yin",
        location="En la depresión entre el maléolo medial y el tendón de Aquiles.",
        indications=["Lumbalgia crónica", "Acúfenos", "Insomnio", "Asma por deficiencia"],
        contraindications=[],
        applications="Deficiencia de riñón, Yin o Yang.",
        benefits="Tonifica el riñón y fortalece la región lumbar.",
        techniques="Inserción perpendicular 0.5-1 cun.",
        observations="Punto Yuan-Fuente.",
        category="Yuan",
    ),
    Point(
        id="PC6", name="Barrera Interna", pinyin="Neiguan",
        meridian="PC", meridian_name="Pericardio - Shou Jue Yin",
        location="2 cun sobre el pliegue de la muñeca, entre los tendones del palmar largo "
                 "y del flexor radial del carpo.",
        indications=["Náuseas", "Vómitos", "Mareo", "Palpitaciones", "Ansiedad"],
        contraindications=[],
        applications="Náuseas de cualquier origen y trastornos torácicos.",
        benefits="Regula el Qi, abre el tórax y armoniza el estómago.",
        techniques="Inserción perpendicular 0.5-1 cun.",
        observations="Punto Luo y de apertura del Yin Wei Mai.",
        category="Luo",
    ),
    Point(
        id="SJ5", name="Barrera Externa", pinyin="Waiguan",
        meridian="SJ", meridian_name="San Jiao - Shou Shao Yang",
        location="2 cun sobre el pliegue dorsal de la muñeca, entre el radio y el cúbito.",
        indications=["Resfriado", "Fiebre", "Acúfenos", "Dolor de brazo"],
        contraindications=[],
        applications="Síndromes exteriores de viento-calor.",
        benefits="Libera el exterior y elimina el calor.",
        techniques="Inserción perpendicular 0.5-1 cun.",
        observations="Punto Luo y de apertura del Yang Wei Mai.",
        category="Luo",
    ),
    Point(
        id="GB20", name="Estanque del Viento", pinyin="Fengchi",
        meridian="GB", meridian_name="Vesícula Biliar - Zu Shao Yang",
        location="Bajo el occipital, en la depresión entre el esternocleidomastoideo y el trapecio.",
        indications=["Cefalea", "Mareo", "Rigidez de nuca", "Visión borrosa"],
        contraindications=["Inserción profunda hacia el bulbo raquídeo"],
        applications="Viento interno y externo, cefaleas.",
        benefits="Expulsa el viento, aclara la cabeza y beneficia los ojos.",
        techniques="Inserción oblicua hacia la punta de la nariz 0.8-1.2 cun.",
        observations="Respetar estrictamente la dirección y la profundidad.",
    ),
    Point(
        id="LR3", name="Gran Asalto", pinyin="Taichong",
        meridian="LR", meridian_name="Hígado - Zu Jue Yin",
        location="En el dorso del pie, en la depresión distal a la unión del primer y segundo metatarsiano.",
        indications=["Irritabilidad", "Cefalea", "Hipertensión", "Dismenorrea"],
        contraindications=[],
        applications="Estancamiento del Qi del hígado y ascenso del Yang.",
        benefits="Mueve el Qi del hígado, calma el viento y nutre la sangre.",
        techniques="Inserción perpendicular 0.5-1 cun.",
        observations="Punto Yuan-Fuente. Con LI4 forma las Cuatro Puertas.",
        category="Yuan",
    ),
    Point(
        id="GV20", name="Cien Reuniones", pinyin="Baihui",
        meridian="GV", meridian_name="Du Mai",
        location="En la línea media de la cabeza, en el punto medio de la línea que une los ápices de las orejas.",
        indications=["Mareo", "Prolapso", "Cefalea del vértex", "Falta de concentración"],
        contraindications=["Fontanela abierta en lactantes"],
        applications="Hundimiento del Qi y trastornos mentales.",
        benefits="Eleva el Yang, calma la mente y aclara los sentidos.",
        techniques="Inserción subcutánea 0.5-0.8 cun. Moxibustión en prolapsos.",
        observations="Punto de reunión de todos los meridianos Yang.",
    ),
    Point(
        id="CV12", name="Centro del Estómago", pinyin="Zhongwan",
        meridian="CV", meridian_name="Ren Mai",
        location="En la línea media del abdomen, 4 cun sobre el ombligo.",
        indications=["Dolor epigástrico", "Distensión", "Reflujo", "Náuseas"],
        contraindications=["Estómago lleno", "Embarazo avanzado"],
        applications="Trastornos del estómago y del Jiao medio.",
        benefits="Armoniza el estómago, tonifica el bazo y transforma la humedad.",
        techniques="Inserción perpendicular 1-1.5 cun.",
        observations="Punto Mu del estómago y punto de reunión de los órganos Fu.",
        category="Mu",
    ),
]


CATALOG: tuple[Point, ...] = tuple(_LUNG_POINTS + _OTHER_POINTS)


def find_point(point_id: str) -> Point | None:
    pid = (point_id or "").strip().upper()
    for p in CATALOG:
        if p.id == pid:
            return p
    return None
