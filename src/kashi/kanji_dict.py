from __future__ import annotations

from types import MappingProxyType

__all__ = ["KANJI_TO_KANA", "MAX_KANJI_KEY_LENGTH"]

# Longest key the fallback scanner tries at each position.
MAX_KANJI_KEY_LENGTH = 4

# Readings favour common song-lyric vocabulary over dictionary frequency.
KANJI_TO_KANA = MappingProxyType(
    {
        # four characters
        "一期一会": "いちごいちえ",
        "永遠不変": "えいえんふへん",
        "春夏秋冬": "しゅんかしゅうとう",
        "大好きだ": "だいすきだ",
        # three characters
        "大丈夫": "だいじょうぶ",
        "大好き": "だいすき",
        "一人で": "ひとりで",
        "二人で": "ふたりで",
        "思い出": "おもいで",
        "向日葵": "ひまわり",
        "流れ星": "ながれぼし",
        "帰り道": "かえりみち",
        "明後日": "あさって",
        "今日は": "きょうは",
        "何時か": "いつか",
        # two characters
        "子供": "こども",
        "桜色": "さくらいろ",
        "大人": "おとな",
        "一人": "ひとり",
        "二人": "ふたり",
        "今日": "きょう",
        "明日": "あした",
        "昨日": "きのう",
        "今夜": "こんや",
        "今宵": "こよい",
        "世界": "せかい",
        "未来": "みらい",
        "過去": "かこ",
        "永遠": "えいえん",
        "運命": "うんめい",
        "奇跡": "きせき",
        "約束": "やくそく",
        "記憶": "きおく",
        "季節": "きせつ",
        "景色": "けしき",
        "言葉": "ことば",
        "笑顔": "えがお",
        "涙色": "なみだいろ",
        "心臓": "しんぞう",
        "気持": "きもち",
        "本当": "ほんとう",
        "自分": "じぶん",
        "貴方": "あなた",
        "彼女": "かのじょ",
        "友達": "ともだち",
        "家族": "かぞく",
        "恋人": "こいびと",
        "青春": "せいしゅん",
        "夜空": "よぞら",
        "星空": "ほしぞら",
        "夕日": "ゆうひ",
        "朝日": "あさひ",
        "太陽": "たいよう",
        "宇宙": "うちゅう",
        "地球": "ちきゅう",
        "花火": "はなび",
        "真夏": "まなつ",
        "真冬": "まふゆ",
        "一緒": "いっしょ",
        "瞬間": "しゅんかん",
        "時間": "じかん",
        "物語": "ものがたり",
        "勇気": "ゆうき",
        "希望": "きぼう",
        "孤独": "こどく",
        "自由": "じゆう",
        "最後": "さいご",
        "最初": "さいしょ",
        "優し": "やさし",
        "悲し": "かなし",
        "寂し": "さびし",
        "嬉し": "うれし",
        "楽し": "たのし",
        "何処": "どこ",
        "何故": "なぜ",
        "一度": "いちど",
        "今度": "こんど",
        "大切": "たいせつ",
        "特別": "とくべつ",
        "普通": "ふつう",
        "名前": "なまえ",
        "音楽": "おんがく",
        "電話": "でんわ",
        "東京": "とうきょう",
        "日本": "にほん",
        # single characters
        "子": "こ",
        "人": "ひと",
        "私": "わたし",
        "僕": "ぼく",
        "俺": "おれ",
        "君": "きみ",
        "彼": "かれ",
        "誰": "だれ",
        "何": "なに",
        "愛": "あい",
        "恋": "こい",
        "夢": "ゆめ",
        "心": "こころ",
        "胸": "むね",
        "涙": "なみだ",
        "声": "こえ",
        "歌": "うた",
        "空": "そら",
        "海": "うみ",
        "風": "かぜ",
        "雨": "あめ",
        "雪": "ゆき",
        "花": "はな",
        "桜": "さくら",
        "星": "ほし",
        "月": "つき",
        "光": "ひかり",
        "影": "かげ",
        "夜": "よる",
        "朝": "あさ",
        "昼": "ひる",
        "夏": "なつ",
        "春": "はる",
        "秋": "あき",
        "冬": "ふゆ",
        "道": "みち",
        "街": "まち",
        "町": "まち",
        "家": "いえ",
        "手": "て",
        "目": "め",
        "瞳": "ひとみ",
        "顔": "かお",
        "髪": "かみ",
        "指": "ゆび",
        "足": "あし",
        "背": "せ",
        "今": "いま",
        "時": "とき",
        "日": "ひ",
        "前": "まえ",
        "後": "あと",
        "先": "さき",
        "上": "うえ",
        "下": "した",
        "中": "なか",
        "外": "そと",
        "側": "そば",
        "隣": "となり",
        "元": "もと",
        "色": "いろ",
        "音": "おと",
        "火": "ひ",
        "水": "みず",
        "命": "いのち",
        "世": "よ",
        "生": "い",
        "行": "い",
        "来": "き",
        "見": "み",
        "言": "い",
        "思": "おも",
        "会": "あ",
        "逢": "あ",
        "待": "ま",
        "知": "し",
        "泣": "な",
        "笑": "わら",
        "歩": "ある",
        "走": "はし",
        "飛": "と",
        "離": "はな",
        "抱": "だ",
        "信": "しん",
        "感": "かん",
        "届": "とど",
        "消": "き",
        "忘": "わす",
        "探": "さが",
        "出": "で",
        "入": "はい",
        "聞": "き",
        "聴": "き",
        "呼": "よ",
        "願": "ねが",
        "祈": "いの",
        "続": "つづ",
        "始": "はじ",
        "終": "お",
        "変": "か",
        "守": "まも",
        "咲": "さ",
        "散": "ち",
        "揺": "ゆ",
        "輝": "かがや",
        "好": "す",
        "嫌": "きら",
        "強": "つよ",
        "弱": "よわ",
        "高": "たか",
        "低": "ひく",
        "遠": "とお",
        "近": "ちか",
        "長": "なが",
        "短": "みじか",
        "新": "あたら",
        "古": "ふる",
        "白": "しろ",
        "黒": "くろ",
        "赤": "あか",
        "青": "あお",
        "優": "やさ",
        "悲": "かな",
        "寂": "さび",
        "嬉": "うれ",
        "楽": "たの",
        "痛": "いた",
        "温": "あたた",
        "冷": "つめ",
        "明": "あか",
        "暗": "くら",
        "一": "いち",
        "二": "に",
        "三": "さん",
        "四": "よん",
        "五": "ご",
        "六": "ろく",
        "七": "なな",
        "八": "はち",
        "九": "きゅう",
        "十": "じゅう",
        "百": "ひゃく",
        "千": "せん",
        "万": "まん",
    }
)
