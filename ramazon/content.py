"""Static devotional text shown on the Home and Duas tabs."""

HERO_QUOTE = "Sizlarning eng yaxshingiz Qur'onni o'rganib, uni o'rgatganingizdir"

DUAS = [
    {
        "key": "saharlik",
        "title": "Saharlik Duosi",
        "text": (
            "Navaytu an asuma sovma shahri ramazona minal fajri ilal mag'ribi, "
            "xolisan lillahi ta'ala."
        ),
        "meaning": (
            "Ramazon oyining ro'zasini tongdan kun botguncha xolis Alloh uchun "
            "tutishni niyat qildim."
        ),
    },
    {
        "key": "iftorlik",
        "title": "Iftorlik Duosi",
        "text": (
            "Allohumma laka sumtu va bika amantu va a'layka tavakkaltu va a'la "
            "rizqika aftartu, faghfirli ma qoddamtu va ma axxortu birohmatika "
            "ya arhamar rohimin."
        ),
        "meaning": (
            "Ey Alloh, ushbu ro'zamni Sen uchun tutdim va Senga iymon keltirdim "
            "va Senga tavakkal qildim va bergan rizqing bilan iftor qildim."
        ),
    },
]
