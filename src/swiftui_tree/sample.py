SAMPLE_SOURCE = '''\
struct ContentView: View {
    var body: some View {
        ZStack {
            Color.black
                .ignoresSafeArea()
            ScrollView {
                VStack(spacing: 20) {
                    TitleView()
                    HeaderImageView()
                    InfoSectionView(
                        emoji: "✨",
                        title: "Overview",
                        content: "Universal Studios Japan is a theme park in Osaka full of rides and attractions based on films and animation, drawing visitors from all over the world."
                    )
                    InfoSectionView(
                        emoji: "🏰",
                        title: "Areas",
                        content: """
                        Super Nintendo World
                        The Wizarding World of Harry Potter
                        Minion Park
                        Jurassic Park
                        """
                    )
                }
            }
            .contentMargins(10)
        }
    }
}

struct TitleView: View {
    var body: some View {
        Text("Universal Studios Japan")
            .font(.system(size: 34, weight: .bold, design: .rounded))
            .foregroundStyle(.white)
            .shadow(radius: 5)
    }
}

struct HeaderImageView: View {
    var body: some View {
        Image(.usj)
            .resizable()
            .scaledToFill()
            .frame(minWidth: 0, maxWidth: .infinity, maxHeight: 250)
            .clipShape(.rect(cornerRadius: 15))
    }
}

struct InfoSectionView: View {
    let emoji: String
    let title: String
    let content: String

    var body: some View {
        VStack(alignment: .leading, spacing: 10) {
            HStack {
                Text(emoji)
                    .font(.title2)
                Text(title)
                    .font(.title2)
                    .fontWeight(.semibold)
                    .foregroundStyle(.blue)
            }
            Text(content)
                .font(.body)
                .foregroundStyle(.gray)
        }
        .padding()
        .frame(maxWidth: .infinity, alignment: .leading)
        .background(.white.opacity(0.9))
        .clipShape(.rect(cornerRadius: 15))
        .shadow(color: .gray.opacity(0.3), radius: 10, y: 5)
    }
}
'''
